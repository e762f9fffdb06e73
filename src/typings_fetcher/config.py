import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

# 5.8 MiB, the largest body the downstream clients accept.
DEFAULT_MAX_RESPONSE_BYTES = int(5.8 * 1024 * 1024)
DEFAULT_MAX_BUFFER = 1024 * 1000
DEFAULT_INSTALL_TIMEOUT = 120.0


@dataclass(frozen=True)
class Settings:
    staging_root: Path
    installer: str = "yarn"
    install_timeout: float = DEFAULT_INSTALL_TIMEOUT
    max_buffer: int = DEFAULT_MAX_BUFFER
    max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES


def load_settings() -> Settings:
    return Settings(
        staging_root=Path(os.getenv("TYPINGS_STAGING_ROOT", tempfile.gettempdir())),
        installer=os.getenv("TYPINGS_INSTALLER", "yarn"),
        install_timeout=float(os.getenv("TYPINGS_INSTALL_TIMEOUT", DEFAULT_INSTALL_TIMEOUT)),
        max_buffer=int(os.getenv("TYPINGS_MAX_BUFFER", DEFAULT_MAX_BUFFER)),
        max_response_bytes=int(os.getenv("TYPINGS_MAX_RESPONSE_BYTES", DEFAULT_MAX_RESPONSE_BYTES)),
    )
