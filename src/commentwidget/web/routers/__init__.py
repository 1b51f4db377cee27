from commentwidget.web.routers.comments import router as comments_router

__all__ = [
    "comments_router",
]
