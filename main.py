# main.py
from dotenv import load_dotenv
load_dotenv()   # <-- Must be first!
import logging
from fastapi import Depends, FastAPI, Form
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from config import get_settings
from logging_config import configure_logging
from models import GenerationRequest, Tone
from services.draft import draft
from services.exceptions import GenerationError
from services.form import ReplyForm, render_page
from services.requester import ReplyRequester

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title="Email Writer")

# ------------- CORS -------------
# the compose-toolbar trigger posts from the webmail origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
# ------------------------------------------------


def get_requester() -> ReplyRequester:
    s = get_settings()
    return ReplyRequester(s.reply_endpoint, timeout=s.request_timeout)


@app.post("/api/email/generate", response_class=PlainTextResponse)
async def generate_email(request: GenerationRequest):
    logger.info("Received email generation request (tone=%r)", request.tone.value)
    try:
        reply = await draft(request)
    except GenerationError as e:
        logger.error("Error generating email: %s", e)
        return PlainTextResponse(f"Error generating email: {e}", status_code=400)
    return PlainTextResponse(reply)


@app.get("/", response_class=HTMLResponse)
def reply_page(theme: str = "light"):
    form = ReplyForm(dark_mode=theme == "dark")
    return HTMLResponse(render_page(form))


@app.post("/", response_class=HTMLResponse)
async def submit_reply(
    email_content: str = Form(""),
    tone: Tone = Form(Tone.NONE),
    generated_reply: str = Form(""),
    theme: str = Form("light"),
    requester: ReplyRequester = Depends(get_requester),
):
    form = ReplyForm(
        requester,
        email_content=email_content,
        tone=tone,
        generated_reply=generated_reply,
        dark_mode=theme == "dark",
    )
    await form.submit()
    return HTMLResponse(render_page(form))


@app.get("/status")
def status():
    return {"status": "running", "app": "Email Writer"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
