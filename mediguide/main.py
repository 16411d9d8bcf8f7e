import logging
import pathlib

from fastapi import Cookie, Depends, FastAPI, File, HTTPException, Response, UploadFile
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from mediguide import llm, sessions
from mediguide.models import ChatRequest, SessionState, SetModelRequest
from mediguide.report import resolve_mime_type
from mediguide.views import ViewController, ViewTransitionError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

_STATIC_DIR = pathlib.Path(__file__).resolve().parent.parent / "static"

app = FastAPI(title="mediguide", version="0.1.0")


def get_controller(
    response: Response,
    session_id: str | None = Cookie(None, alias=sessions.COOKIE_NAME),
) -> ViewController:
    sid, controller = sessions.get_or_create(session_id)
    if sid != session_id:
        response.set_cookie(sessions.COOKIE_NAME, sid, httponly=True, samesite="lax")
    return controller


def _conflict(exc: ViewTransitionError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(exc))


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "llm_configured": llm.is_configured(),
        "sessions": sessions.count(),
    }


# ── View state routes ──


@app.get("/api/state", response_model=SessionState)
async def state(controller: ViewController = Depends(get_controller)):
    return controller.snapshot()


@app.post("/api/start", response_model=SessionState)
async def start(controller: ViewController = Depends(get_controller)):
    try:
        controller.start_upload()
    except ViewTransitionError as e:
        raise _conflict(e)
    return controller.snapshot()


@app.post("/api/home", response_model=SessionState)
async def home(controller: ViewController = Depends(get_controller)):
    try:
        controller.go_home()
    except ViewTransitionError as e:
        raise _conflict(e)
    return controller.snapshot()


@app.post("/api/upload", response_model=SessionState)
async def upload(
    file: UploadFile = File(...),
    controller: ViewController = Depends(get_controller),
):
    data = await file.read()
    log.info("Report uploaded (%s, %d bytes)", file.content_type, len(data))
    try:
        await controller.submit_report(data, resolve_mime_type(file.content_type))
    except ViewTransitionError as e:
        raise _conflict(e)
    return controller.snapshot()


@app.post("/api/new-upload", response_model=SessionState)
async def new_upload(controller: ViewController = Depends(get_controller)):
    try:
        controller.new_upload()
    except ViewTransitionError as e:
        raise _conflict(e)
    return controller.snapshot()


@app.post("/api/chat", response_model=SessionState)
async def chat(req: ChatRequest, controller: ViewController = Depends(get_controller)):
    try:
        await controller.send_message(req.message)
    except ViewTransitionError as e:
        raise _conflict(e)
    return controller.snapshot()


# ── Model settings ──


@app.get("/api/settings")
async def get_settings():
    return {
        "current_model": llm.get_model(),
        "available_models": llm.AVAILABLE_MODELS,
    }


@app.put("/api/settings/model")
async def set_model(req: SetModelRequest):
    if req.model not in llm.AVAILABLE_MODELS:
        raise HTTPException(status_code=400, detail=f"Unknown model: {req.model}")
    llm.set_model(req.model)
    return {"current_model": llm.get_model()}


# Serve index.html at root (no-cache so browser always gets latest)
@app.get("/")
async def index():
    return FileResponse(
        _STATIC_DIR / "index.html",
        headers={"Cache-Control": "no-cache"},
    )


app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")


@app.middleware("http")
async def add_no_cache_to_static(request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/static/"):
        response.headers["Cache-Control"] = "no-cache"
    return response
