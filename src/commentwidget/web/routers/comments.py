"""Comment section endpoints returning the embeddable HTML fragment."""

from typing import Annotated

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse

from commentwidget.web.deps import AppDep
from commentwidget.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["comments"])


@router.get(
    "/comments",
    summary="Render comment section",
    description="Render all comments in posting order followed by the submission form.",
    operation_id="getComments",
    response_class=HTMLResponse,
    responses={
        200: {"description": "Comment section HTML fragment"},
        500: {"model": ErrorResponse, "description": "Comments log could not be read"},
    },
)
async def get_comments(app: AppDep) -> HTMLResponse:
    return HTMLResponse(await app.render_comments())


@router.post(
    "/comments",
    summary="Submit comment",
    description=(
        "Submit a comment from the widget form and render the refreshed comment section. "
        "Submissions with a filled honeypot field, an empty name or body, or oversized fields "
        "are dropped silently and the current section is rendered unchanged."
    ),
    operation_id="postComment",
    response_class=HTMLResponse,
    responses={
        200: {"description": "Comment section HTML fragment"},
        500: {"model": ErrorResponse, "description": "Comment could not be stored"},
    },
)
async def post_comment(
    app: AppDep,
    name: Annotated[str, Form()] = "",
    body: Annotated[str, Form()] = "",
    website: Annotated[str, Form(description="Honeypot, must be left empty")] = "",
) -> HTMLResponse:
    return HTMLResponse(await app.submit_and_render(name, body, website))
