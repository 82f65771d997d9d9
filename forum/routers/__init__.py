from .forum_post import router as forum_post_router

routes = [
    forum_post_router,
]
