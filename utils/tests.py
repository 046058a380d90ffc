from fastapi import FastAPI


def create_test_app(routers, middlewares=None, prefix: str = "") -> FastAPI:
    """
    Create a FastAPI test application with the given routers and middlewares.

    Args:
        routers: The router (or list of routers) to include in the app.
        middlewares: Optional list of (middleware_class, config_dict) tuples.
        prefix: Optional path prefix applied to every router.

    Returns:
        FastAPI: A configured FastAPI application.

    Example:
        app = create_test_app([router1, router2], middlewares=[(MiddlewareClass, config_dict)])
    """
    app = FastAPI()

    from api.dependencies.rate_limits import setup_rate_limiter
    from api.errors import setup_exception_handlers

    setup_rate_limiter(app)
    setup_exception_handlers(app)

    if middlewares:
        for middleware_class, middleware_config in middlewares:
            app.add_middleware(middleware_class, **middleware_config)

    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router, prefix=prefix)

    return app
