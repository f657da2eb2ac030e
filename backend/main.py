# backend/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from backend import config
from backend.errors import UsuariosError
from backend.routers import usuarios
from backend.utils.database import build_engine, build_sessionmaker, init_db

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("backend")


def create_app(database_url: str | None = None, bcrypt_rounds: int | None = None) -> FastAPI:
    """Build the API. Nothing touches the database until the lifespan starts."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application Startup: connecting to the database...")
        engine = build_engine(database_url)
        # No retry: an unreachable database aborts startup
        await init_db(engine)
        app.state.engine = engine
        app.state.sessionmaker = build_sessionmaker(engine)
        logger.info("Application Startup: tables ready.")
        yield
        await engine.dispose()
        logger.info("Application Shutdown: connection pool closed.")

    app = FastAPI(title="Usuarios API", lifespan=lifespan)
    app.state.bcrypt_rounds = bcrypt_rounds or config.BCRYPT_ROUNDS

    app.add_middleware(
        CORSMiddleware, allow_origins=config.CORS_ORIGINS, allow_credentials="*" not in config.CORS_ORIGINS,
        allow_methods=["*"], allow_headers=["*"],
    )

    @app.exception_handler(UsuariosError)
    async def usuarios_error_handler(request: Request, exc: UsuariosError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    app.include_router(usuarios.router)  # Defines /api/usuarios/... internally

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/")
    def read_root():
        return {"message": "Usuarios API running."}

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("backend.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
