"""FastAPI application entry-point with CORS, Socket.io, and the execution routes."""

import os
import socketio
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from services.realtime import sio


# ─── FastAPI lifespan ───────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    print(f"[OK] Execution backend: {settings.EXECUTION_BACKEND} (validation: {settings.VALIDATION_BACKEND})")
    print(f"[OK] Piston: {settings.PISTON_API_URL}  Judge0: {settings.JUDGE0_API_URL}")
    yield
    # Shutdown
    print("[OK] FastAPI server shut down.")


# ─── Create App ─────────────────────────────────────────────────

app = FastAPI(title="LeetLab Execution API", version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── Register routes ────────────────────────────────────────────

from routes.code_execution import router as code_exec_router
from routes.problems import router as problems_router

app.include_router(code_exec_router)
app.include_router(problems_router)


# ─── Health check ────────────────────────────────────────────────

@app.get("/api/health")
async def health_check():
    return {"status": "ok", "message": "LeetLab execution API is running"}


# ─── Wrap with Socket.io ASGI app ──────────────────────────────

socket_app = socketio.ASGIApp(sio, app)


# ─── Entry-point ─────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", str(settings.PORT)))
    uvicorn.run("main:socket_app", host="0.0.0.0", port=port, reload=True)
