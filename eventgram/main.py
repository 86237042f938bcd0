"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from eventgram.config import settings
from eventgram.exceptions import EventgramError
from eventgram.handlers.exception_handler import (
    eventgram_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from eventgram.logging.config import configure_logging
from eventgram.middleware import LoggingMiddleware, RequestSizeValidationMiddleware
from eventgram.routes import events, posts, status, users

# Configure logging before creating the app
configure_logging()

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## Eventgram API

Users create time-boxed events and post text and images to them while the
events are active.

### Key Features

- **Events**: Create, update and delete events with a bounded time window
- **Feed**: Page through public events ordered by creation or end time
- **Posts**: Post to an event while it is active, attach one image per post
- **Users**: Register a unique username and manage your own profile

### Authentication

Mutating endpoints require a bearer credential issued with the identity CLI:

```
Authorization: Bearer <key_id>.<secret>
```

Creating events and posts additionally requires a registered user
(`POST /u`).
""",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Starlette wraps in reverse order: the last middleware added is outermost.
# Logging wraps size validation so rejected uploads are still logged.
app.add_middleware(RequestSizeValidationMiddleware)
app.add_middleware(LoggingMiddleware)

app.add_exception_handler(EventgramError, eventgram_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(events.router)
app.include_router(events.feed_router)
app.include_router(posts.router)
app.include_router(users.router)
app.include_router(status.router)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """
    Root endpoint with API information.

    Returns:
        Dict with welcome message and docs link
    """
    return {
        "message": f"Welcome to {settings.api_title}",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/status",
    }
