import os

import pytest

_ENV_VARS_TO_ISOLATE = [
    "SDL_IMPORT_NO_IMPORTS",
    "SDL_IMPORT_ROOT",
]


@pytest.fixture(autouse=True)
def env_isolation():
    """Isolate environment variables between tests."""
    backup = {k: os.environ.pop(k, None) for k in _ENV_VARS_TO_ISOLATE}
    try:
        yield
    finally:
        for k, v in backup.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v
