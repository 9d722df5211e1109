from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from selami.api.routes import router
from selami.core.scheduler import LoopScheduler
from selami.core.wizard import WizardController
from selami.effects.celebration import CelebrationSequence
from selami.effects.outbox import EffectOutbox
from selami.observability.logging import log
from selami.settings import settings


def build_wizard(outbox: EffectOutbox, scheduler=None) -> WizardController:
    """Wire the wizard's collaborators to the outbox the page drains."""
    scheduler = scheduler or LoopScheduler()
    celebration = CelebrationSequence(emit=outbox.confetti, scheduler=scheduler)
    return WizardController(
        clipboard_write=outbox.clipboard_write,
        launch=outbox.launch,
        celebrate=celebration.celebrate,
        scheduler=scheduler,
    )


def create_app(wizard: Optional[WizardController] = None, outbox: Optional[EffectOutbox] = None) -> FastAPI:
    outbox = outbox or EffectOutbox()
    wizard = wizard or build_wizard(outbox)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        log(event="boot", receiverIdentifier=wizard.receiver_identifier, strictAmount=wizard.strict_amount)
        yield
        wizard.close()

    app = FastAPI(title="Selami Wizard", lifespan=lifespan)
    # One wizard per process: the page and this server form one session.
    app.state.wizard = wizard
    app.state.outbox = outbox

    origins = [x.strip() for x in settings.CORS_ORIGINS.split(",") if x.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    def root():
        return {
            "status": "ok",
            "message": "Selami wizard is running. Read GET /wizard and drive it with POST /wizard/actions/{action}.",
        }

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.exception_handler(Exception)
    async def universal_exception_handler(request: Request, exc: Exception):
        log(event="unhandled_exception", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"status": "error", "detail": "internal_error"})

    return app


app = create_app()
