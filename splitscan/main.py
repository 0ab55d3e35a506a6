import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from splitscan.config import get_settings
from splitscan.logging_config import setup_logging
from splitscan.middleware import RequestLoggingMiddleware, SessionMiddleware
from splitscan.ratelimit import limiter
from splitscan.routes import receipts

load_dotenv()
settings = get_settings()

# Sentry
if settings.sentry_dsn:
    # Disable the auto-detected OpenAI Agents integration due to
    # version incompatibility (sentry-sdk expects a different internal API)
    _disabled = []
    try:
        from sentry_sdk.integrations.openai_agents import OpenAIAgentsIntegration
        _disabled.append(OpenAIAgentsIntegration)
    except ImportError:
        pass
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=0.1,
        send_default_pii=False,
        disabled_integrations=_disabled,
    )

logger = setup_logging(settings.log_level)

app = FastAPI(title="Splitscan API", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SessionMiddleware)

# Routes
app.include_router(receipts.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
