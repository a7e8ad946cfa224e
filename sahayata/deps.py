from fastapi import Request


def get_repo(request: Request):
    """Process-scoped repository, created in the app lifespan."""
    return request.app.state.repo
