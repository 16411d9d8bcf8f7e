from mediguide.models import AnalysisRecord, ParameterStatus

ANALYSIS_INSTRUCTIONS = """\
You are MediGuide AI, a helpful medical assistant.
Analyze this medical report image.
Extract the data and provide a simplified explanation for a patient who is not a doctor.
Identify the test type, key values, normal ranges, and status.
Highlight any red flags calmly.
Provide general lifestyle recommendations.
ALWAYS include a disclaimer that this is AI-generated and not a replacement for a doctor.
"""

# JSON schema the model output is constrained to. Field names match the
# aliases on mediguide.models.AnalysisRecord.
ANALYSIS_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "reportType": {
            "type": "string",
            "description": "Type of the report, e.g., 'CBC Blood Test', 'Lipid Profile', 'MRI Scan'",
        },
        "summary": {
            "type": "string",
            "description": "A friendly, easy-to-understand summary of the overall health status based on the report.",
        },
        "parameters": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "value": {"type": "string"},
                    "unit": {"type": "string"},
                    "status": {
                        "type": "string",
                        "enum": [s.value for s in ParameterStatus],
                    },
                    "referenceRange": {"type": "string"},
                    "explanation": {
                        "type": "string",
                        "description": "What does this test measure in simple terms?",
                    },
                    "implication": {
                        "type": "string",
                        "description": "What does this specific result mean for the patient?",
                    },
                },
                "required": ["name", "value", "status", "explanation", "implication"],
            },
        },
        "redFlags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of critical or high-risk findings that need immediate attention. Be calm but clear.",
        },
        "lifestyleRecommendations": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Simple lifestyle, diet, or monitoring suggestions based on the results.",
        },
        "disclaimer": {"type": "string", "description": "Standard medical disclaimer."},
    },
    "required": [
        "reportType",
        "summary",
        "parameters",
        "redFlags",
        "lifestyleRecommendations",
        "disclaimer",
    ],
}

RESPONSE_FORMAT: dict = {
    "type": "json_schema",
    "json_schema": {"name": "medical_analysis", "schema": ANALYSIS_SCHEMA},
}

_CHAT_INSTRUCTIONS = """\
You are MediGuide AI. You have analyzed a patient's medical report.
Answer their follow-up questions clearly, empathetically, and simply.
Do not give specific medical prescriptions (drug names/dosages).
Always advise consulting their doctor for specific treatment."""


def build_report_context(record: AnalysisRecord) -> str:
    return (
        "Context (Medical Report Analysis):\n"
        f"Report Type: {record.report_type}\n"
        f"Summary: {record.summary}\n"
        f"Key Abnormalities: {', '.join(record.red_flags)}"
    )


def build_chat_system_prompt(record: AnalysisRecord) -> str:
    return f"{_CHAT_INSTRUCTIONS}\nContext: {build_report_context(record)}"


def build_greeting(record: AnalysisRecord) -> str:
    return f"I've analyzed your {record.report_type}. Ask me anything about it!"
