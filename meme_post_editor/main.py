import logging
from contextlib import asynccontextmanager

import dotenv
import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from meme_post_editor.auth import login_redirect_url
from meme_post_editor.errors import LoginRequired
from meme_post_editor.perf import performance_middleware
from meme_post_editor.routes import edit_post
from meme_post_editor.settings_loader import load_settings

logger = logging.getLogger(__name__)
logging.basicConfig()
logging.getLogger("meme_post_editor").setLevel(logging.INFO)

dotenv.load_dotenv()

settings = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one HTTP client shared by every request's PostApi
    app.state.http = httpx.AsyncClient(timeout=settings.api_timeout)
    logger.info(f"Using posts API at {settings.api_url}")
    yield
    # Shutdown
    await app.state.http.aclose()


app = FastAPI(lifespan=lifespan)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(performance_middleware)

app.include_router(edit_post.router)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    login_path = request.app.state.settings.login_path
    return RedirectResponse(
        url=login_redirect_url(login_path, exc.next_path), status_code=303
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
