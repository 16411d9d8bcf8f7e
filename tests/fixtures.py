"""Canned model replies shared by the test modules."""

import copy
import json

SAMPLE_ANALYSIS = {
    "reportType": "CBC Blood Test",
    "summary": "Most of your blood counts look healthy. Your hemoglobin is a little low.",
    "parameters": [
        {
            "name": "Hemoglobin",
            "value": "11.2",
            "unit": "g/dL",
            "status": "Abnormal",
            "referenceRange": "12.0-16.0",
            "explanation": "The protein in red blood cells that carries oxygen.",
            "implication": "Slightly low; can cause tiredness.",
        },
        {
            "name": "WBC",
            "value": "6.1",
            "unit": "10^3/uL",
            "status": "Normal",
            "referenceRange": "4.0-11.0",
            "explanation": "White blood cells fight infection.",
            "implication": "Within the healthy range.",
        },
        {
            "name": "Platelets",
            "value": "510",
            "unit": "10^3/uL",
            "status": "Critical",
            "referenceRange": "150-400",
            "explanation": "Cells that help your blood clot.",
            "implication": "Well above range; your doctor should review this soon.",
        },
        {
            "name": "RBC",
            "value": "4.6",
            "status": "Normal",
            "explanation": "Red blood cell count.",
            "implication": "Within the healthy range.",
        },
    ],
    "redFlags": ["Platelet count is well above the reference range"],
    "lifestyleRecommendations": [
        "Eat iron-rich foods such as spinach and lentils",
        "Repeat the test in 4-6 weeks",
    ],
    "disclaimer": "This explanation is AI-generated and is not a replacement for a doctor.",
}


def sample_analysis() -> dict:
    return copy.deepcopy(SAMPLE_ANALYSIS)


def sample_reply() -> str:
    return json.dumps(SAMPLE_ANALYSIS)
