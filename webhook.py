"""Webhook entry point for the ChatMaster bot (FastAPI + uvicorn)."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from telegram import Update
from telegram.ext import Application
import uvicorn

from config import (
    TELEGRAM_TOKEN,
    WEBHOOK_URL,
    WEBHOOK_SECRET,
    PORT,
    logger,
    validate_config,
)
from application import build_application
from http_client import close_http_client
from localization import validate_localization
from preferences import BOT_DATA_KEY

# Created during startup, once the configuration has been validated
application: Application | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    global application
    app_initialized = False
    try:
        # Startup event
        if not validate_config(is_webhook=True):
            raise RuntimeError("Configuration validation failed")

        application = build_application(TELEGRAM_TOKEN)
        await application.initialize()
        app_initialized = True

        # Set the webhook (idempotent operation) - skip if WEBHOOK_URL not available
        if WEBHOOK_URL:
            # Always set webhook to ensure secret token stays in sync
            try:
                await application.bot.set_webhook(
                    url=WEBHOOK_URL,
                    secret_token=WEBHOOK_SECRET,
                    allowed_updates=Update.ALL_TYPES,
                )
                logger.info(f"Webhook set to {WEBHOOK_URL}")
            except Exception as e:
                logger.warning(f"Could not set webhook during startup: {e}")
        else:
            logger.info("WEBHOOK_URL not set - webhook will be configured externally")

        logger.info("ChatMaster AI bot is ready to receive webhook updates")
        yield
    except Exception as e:
        logger.critical(f"Startup failed: {e}")
        raise
    finally:
        # Shutdown event
        try:
            # Don't delete webhook - let it persist for next startup
            logger.info("Shutting down bot application")
            if app_initialized:
                await application.shutdown()
            await close_http_client()
        except Exception as e:
            logger.error(f"Error in shutdown: {e}")
        application = None


app = FastAPI(lifespan=lifespan)


@app.get("/")
async def root():
    """Root endpoint for health checks."""
    return {"status": "running", "message": "ChatMaster bot webhook is active"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    Checks localization coverage and reports the number of stored preferences.
    """
    health_status = {
        "status": "healthy",
        "service": "chatmaster-bot",
        "checks": {},
    }

    localization_valid, missing = validate_localization()
    if localization_valid:
        health_status["checks"]["localization"] = "ok"
    else:
        health_status["checks"]["localization"] = f"missing: {', '.join(missing)[:50]}"
        health_status["status"] = "degraded"

    health_status["checks"]["bot"] = "ready" if application is not None else "not started"

    try:
        store = application.bot_data[BOT_DATA_KEY] if application is not None else None
        health_status["checks"]["language_preferences"] = (
            len(store) if store is not None else 0
        )
    except TypeError:
        # Store implementations are not required to support len()
        health_status["checks"]["language_preferences"] = "unknown"

    # Return appropriate status code
    if health_status["status"] == "healthy":
        return health_status
    return JSONResponse(status_code=503, content=health_status)


@app.post("/webhook")
async def webhook(request: Request):
    """Handle incoming webhook requests from Telegram."""
    try:
        # Validate webhook secret token (required for security)
        secret_header = request.headers.get("X-Telegram-Bot-Api-Secret-Token")
        client_host = request.client.host if request.client else "unknown"
        if not WEBHOOK_SECRET:
            logger.error("WEBHOOK_SECRET is missing; refusing webhook request.")
            return Response(status_code=503)
        if secret_header != WEBHOOK_SECRET:
            logger.warning(
                f"Webhook request with invalid secret token from {client_host}"
            )
            return Response(status_code=403)
        if application is None:
            logger.error("Webhook request received before the bot application started")
            return Response(status_code=503)

        # Get the request body as JSON
        data = await request.json()

        # Create an Update object from the received data
        update = Update.de_json(data, application.bot)

        # Process the update
        await application.process_update(update)

        # Return a 200 OK response to Telegram
        return Response(status_code=200)

    except Exception as e:
        logger.error(f"Error in webhook: {e}")
        return Response(status_code=500)


if __name__ == "__main__":
    # Run the FastAPI app using uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
