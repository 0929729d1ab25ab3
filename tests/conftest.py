"""
Shared fixtures.

Each test gets its own SQLite file database, an httpx client wired to the
app with get_db overridden, and a fake Claude endpoint behind
httpx.MockTransport.
"""

import json
import os
from types import SimpleNamespace
from typing import Optional

# Settings require DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import httpx
import pytest
from closet_worthy.core.database import Base, build_engine, build_session_maker, get_db, transaction
from closet_worthy.main import app
from closet_worthy.models import Brand, Category, Condition, Subcategory
from closet_worthy.services.ai import AIGateway, get_ai_gateway
from closet_worthy.services.storage import get_storage_service

PHOTO_BASE_URL = "https://closet-photos.s3.ca-central-1.amazonaws.com"


def claude_reply(text: str, status_code: int = 200) -> httpx.Response:
    """A Messages API response carrying one text block"""
    return httpx.Response(status_code, json={"content": [{"type": "text", "text": text}]})


def prompt_text(request: httpx.Request) -> str:
    """Text of the user message in a captured request"""
    content = json.loads(request.content)["messages"][0]["content"]
    if isinstance(content, list):
        return "\n".join(block["text"] for block in content if block["type"] == "text")
    return content


class FakeClaude:
    """
    Answers each prompt with the first canned reply whose marker appears in it.

    A reply may be a string (sent as the text block) or an httpx.Response.
    Prompts with no matching marker get a 500.
    """

    def __init__(self):
        self.replies: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, marker: str, response) -> None:
        self.replies[marker] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        prompt = prompt_text(request)
        for marker, response in self.replies.items():
            if marker in prompt:
                if isinstance(response, httpx.Response):
                    return response
                return claude_reply(response)
        return httpx.Response(500, json={"error": {"message": "no canned reply"}})

    @property
    def prompts(self) -> list[str]:
        return [prompt_text(request) for request in self.requests]


class FakeStorage:
    """Stands in for StorageService; hands out predictable URLs"""

    def __init__(self):
        self.uploads: list[tuple[bytes, str]] = []
        self.deleted: list[str] = []
        self.base_url = PHOTO_BASE_URL

    async def upload_photo(self, file_content: bytes, file_extension: str = "jpg", folder: Optional[str] = None) -> str:
        self.uploads.append((file_content, file_extension))
        return f"{self.base_url}/closet-photos/photo_{len(self.uploads)}.{file_extension}"

    async def delete_photo(self, url: str) -> bool:
        if not url.startswith(f"{self.base_url}/"):
            return False
        self.deleted.append(url)
        return True


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'closet.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    """httpx client against the app with get_db bound to the test database"""

    async def get_test_db():
        async with transaction(session_maker) as session:
            yield session

    app.dependency_overrides[get_db] = get_test_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_claude():
    return FakeClaude()


@pytest.fixture
def ai_gateway(fake_claude):
    """Enabled gateway talking to FakeClaude, installed on the app"""
    gateway = AIGateway(api_key="test-key", transport=httpx.MockTransport(fake_claude.handler))
    app.dependency_overrides[get_ai_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_ai_gateway, None)


@pytest.fixture
def disabled_gateway():
    """Gateway with no API key, installed on the app"""
    gateway = AIGateway(api_key=None)
    app.dependency_overrides[get_ai_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_ai_gateway, None)


@pytest.fixture
def fake_storage():
    storage = FakeStorage()
    app.dependency_overrides[get_storage_service] = lambda: storage
    yield storage
    app.dependency_overrides.pop(get_storage_service, None)


@pytest.fixture
async def reference_data(session_maker):
    """Agolde / Jeans / Straight / Excellent plus a second brand and category"""
    async with session_maker() as session:
        agolde = Brand(name="Agolde", website="https://agolde.com")
        isabel_marant = Brand(name="Isabel Marant Étoile")
        jeans = Category(name="Jeans", body_area="Bottom")
        outerwear = Category(name="Outerwear", body_area="Top")
        session.add_all([agolde, isabel_marant, jeans, outerwear])
        await session.flush()

        straight = Subcategory(name="Straight", category_id=jeans.id)
        jacket = Subcategory(name="Jackets", category_id=outerwear.id)
        excellent = Condition(label="Excellent", score=4, notes="Worn a few times, no visible wear")
        good = Condition(label="Good", score=2)
        session.add_all([straight, jacket, excellent, good])
        await session.commit()

        return SimpleNamespace(
            agolde=agolde.id,
            isabel_marant=isabel_marant.id,
            jeans=jeans.id,
            outerwear=outerwear.id,
            straight=straight.id,
            jacket=jacket.id,
            excellent=excellent.id,
            good=good.id,
        )


@pytest.fixture
def item_payload(reference_data):
    """Request body for the Agolde jeans used across the item tests"""
    return {
        "item_name": "90s Pinch Waist Jeans",
        "brand_id": reference_data.agolde,
        "category_id": reference_data.jeans,
        "subcategory_id": reference_data.straight,
        "condition_id": reference_data.excellent,
        "size": "30",
        "colour": "Washed Black",
        "purchase_price_cad": 280,
        "status": "Keep",
    }
