import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# 1x1 transparent PNG
PIXEL_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def pixel_png_b64():
    return PIXEL_PNG_B64


@pytest.fixture
def pixel_data_uri():
    return f"data:image/png;base64,{PIXEL_PNG_B64}"
