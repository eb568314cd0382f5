"""Application configuration loaded from environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

BACKENDS = ("piston", "judge0")


class Settings:
    """Application settings parsed from environment."""

    def __init__(self):
        # --- Piston ---
        self.PISTON_API_URL: str = os.getenv("PISTON_API_URL", "https://emkc.org/api/v2/piston").rstrip("/")
        self.PISTON_REQUEST_DELAY: float = float(os.getenv("PISTON_REQUEST_DELAY", "0.25"))
        self.PISTON_COMPILE_TIMEOUT: int = int(os.getenv("PISTON_COMPILE_TIMEOUT", "10000"))
        self.PISTON_RUN_TIMEOUT: int = int(os.getenv("PISTON_RUN_TIMEOUT", "5000"))

        # --- Judge0 ---
        self.JUDGE0_API_URL: str = os.getenv("JUDGE0_API_URL", "http://localhost:2358").rstrip("/")
        self.JUDGE0_API_KEY: str = os.getenv("JUDGE0_API_KEY", "").strip()
        self.JUDGE0_API_HOST: str = os.getenv("JUDGE0_API_HOST", "").strip()
        self.JUDGE0_BATCH_SIZE: int = max(1, int(os.getenv("JUDGE0_BATCH_SIZE", "20")))
        self.JUDGE0_POLL_INTERVAL: float = float(os.getenv("JUDGE0_POLL_INTERVAL", "1.0"))
        self.JUDGE0_MAX_POLLS: int = max(1, int(os.getenv("JUDGE0_MAX_POLLS", "60")))

        # --- Execution ---
        self.EXECUTION_BACKEND: str = self._backend("EXECUTION_BACKEND", "piston")
        self.VALIDATION_BACKEND: str = self._backend("VALIDATION_BACKEND", "judge0")
        self.HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "30"))

        # --- Server ---
        self.CORS_ORIGINS: list[str] = self._load_origins()
        self.PORT: int = int(os.getenv("PORT", "8000"))

    # ---- helpers ----
    def _backend(self, var: str, default: str) -> str:
        value = os.getenv(var, default).strip().lower()
        if value not in BACKENDS:
            print(f"⚠️  {var}={value!r} is not one of {BACKENDS}, using {default!r}")
            return default
        return value

    def _load_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "")
        origins = [o.strip() for o in raw.split(",") if o.strip()]
        return origins or [
            "http://localhost:5173",    # Vite frontend
            "http://localhost:8000",    # Self
            "http://127.0.0.1:5173",
            "http://127.0.0.1:8000",
        ]

    def judge0_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.JUDGE0_API_KEY:
            headers["X-RapidAPI-Key"] = self.JUDGE0_API_KEY
            if self.JUDGE0_API_HOST:
                headers["X-RapidAPI-Host"] = self.JUDGE0_API_HOST
        return headers


settings = Settings()
