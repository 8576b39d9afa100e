# meme_post_editor/routes/edit_post.py
import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from meme_post_editor.graphql_client import GraphQLPostApi, PostApi
from meme_post_editor.models import FormValues
from meme_post_editor.navigation import safe_back_target
from meme_post_editor.page import EditPostPage
from meme_post_editor.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/post/edit", tags=["edit-post"])


async def get_post_api(request: Request) -> PostApi:
    """PostApi for this request, authenticated with the browser's session cookie"""
    settings = request.app.state.settings
    session_cookie = request.cookies.get(settings.session_cookie)
    return GraphQLPostApi(
        http=request.app.state.http,
        url=settings.api_url,
        cookie_header=f"{settings.session_cookie}={session_cookie}"
        if session_cookie
        else None,
        timeout=settings.api_timeout,
    )


@router.get("/{post_id}", response_class=HTMLResponse)
async def edit_post_form(
    post_id: str,
    request: Request,
    api: PostApi = Depends(get_post_api),
):
    # Remember where the user came from so a successful edit can send them back
    back = safe_back_target(
        request.headers.get("referer"), request.url.netloc, exclude=request.url.path
    )
    page = EditPostPage(api, path=request.url.path, back=back)
    try:
        await page.activate(post_id)
        return page.render(templates, request)
    finally:
        page.close()


@router.post("/{post_id}", response_class=HTMLResponse)
async def edit_post_submit(
    post_id: str,
    request: Request,
    title: str = Form(""),
    text: str = Form(""),
    back: str = Form(""),
    api: PostApi = Depends(get_post_api),
):
    back_target = safe_back_target(back, request.url.netloc, exclude=request.url.path)
    page = EditPostPage(api, path=request.url.path, back=back_target)
    try:
        await page.activate(post_id)
        target = await page.submit(FormValues(title=title, text=text))
        if target:
            return RedirectResponse(url=target, status_code=303)
        return page.render(templates, request)
    finally:
        page.close()
