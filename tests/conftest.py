"""
Pytest configuration and shared fixtures for Ink & Verse export tests.
"""
import base64
import io
import sys
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from inkverse.contracts import LayoutMode, PoemCollection, PoemRecord, ThemeStyle


QUIET_NIGHT_THOUGHTS = "床前明月光\n疑是地上霜\n举头望明月\n低头思故乡"


def make_image_uri(fmt: str = "PNG", subtype: str = "png", size=(8, 8)) -> str:
    """Real image bytes produced by Pillow, as a data URI."""
    buffer = io.BytesIO()
    Image.new("RGB", size, (180, 40, 40)).save(buffer, fmt)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{subtype};base64,{encoded}"


# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

@pytest.fixture
def test_settings(temp_dir: Path) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        book_title="墨韵诗集",
        book_subtitle="Ink & Verse",
        language="zh-CN",
        output_dir=temp_dir / "exports",
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp(prefix="inkverse_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fixtures: Images
# ============================================================================

@pytest.fixture
def image_uri():
    """Factory for Pillow-generated data URIs."""
    return make_image_uri


@pytest.fixture
def png_uri() -> str:
    return make_image_uri("PNG", "png")


@pytest.fixture
def jpeg_uri() -> str:
    """JPEG declared with the non-standard 'jpg' subtype."""
    return make_image_uri("JPEG", "jpg")


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

@pytest.fixture
def quiet_night() -> PoemRecord:
    """Four short lines, vertical, no image."""
    return PoemRecord(
        id="p1",
        title="静夜思",
        author="李白",
        content=QUIET_NIGHT_THOUGHTS,
        layout=LayoutMode.VERTICAL,
        theme=ThemeStyle.CLASSIC,
        date_created=1700000000000,
    )


@pytest.fixture
def long_poem() -> PoemRecord:
    """A single 200-character line declared vertical."""
    return PoemRecord(
        id="p2",
        title="长歌",
        author="",
        content="春" * 200,
        layout=LayoutMode.VERTICAL,
        theme=ThemeStyle.DARK,
    )


@pytest.fixture
def illustrated_poem(png_uri: str) -> PoemRecord:
    return PoemRecord(
        id="p3",
        title="",
        author="王维",
        content="空山不见人\n但闻人语响\n返景入深林\n复照青苔上",
        image_url=png_uri,
        layout=LayoutMode.HORIZONTAL,
        theme=ThemeStyle.NATURE,
    )


@pytest.fixture
def sample_collection(quiet_night, long_poem, illustrated_poem) -> PoemCollection:
    return PoemCollection([quiet_night, long_poem, illustrated_poem])


@pytest.fixture
def empty_collection() -> PoemCollection:
    return PoemCollection([])
