import os
import shutil
import tempfile

# Settings and the engine are built at import time; point them at throwaway
# storage and an in-memory database before anything imports resale_catalog.
_STORAGE_ROOT = tempfile.mkdtemp(prefix="resale-catalog-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["IMAGES_DIR"] = os.path.join(_STORAGE_ROOT, "images")
os.environ["EXPORT_DIR"] = os.path.join(_STORAGE_ROOT, "exports")
os.environ["BATCH_ITEM_DELAY_SECONDS"] = "0"
os.environ["ENVIRONMENT"] = "test"
os.environ["VISION_PROVIDER"] = "openai"

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from resale_catalog.config import get_settings
from resale_catalog.domain.models.category import Category
from resale_catalog.domain.models.product import Product
from resale_catalog.domain.models.user import User
from resale_catalog.domain.models.work_process import WorkProcess
from resale_catalog.domain.schemas.analysis import AnalysisResult
from resale_catalog.infrastructure.database import Base, SessionLocal, engine
from resale_catalog.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from resale_catalog.infrastructure.repositories.work_process_repository import SQLAlchemyWorkProcessRepository
from resale_catalog.infrastructure.storage import FileStorage
from resale_catalog.interfaces.deps import get_vision_analyzer
from resale_catalog.main import app


class FakeAnalyzer:
    """Stands in for the vision model; records every call."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.results: Dict[str, AnalysisResult] = {}
        self.failures: Dict[str, Exception] = {}

    async def analyze(self, product_id: str, image_filenames: List[str]) -> AnalysisResult:
        self.calls.append((product_id, list(image_filenames)))
        if product_id in self.failures:
            raise self.failures[product_id]
        return self.results.get(product_id) or AnalysisResult(
            title=[f"{product_id} title", f"{product_id} alt title"],
            category="メンズ",
            level="A",
            measurement="着丈70",
            measurement_type={"foreign": "M", "japanese": "L"},
            condition="3",
            shop1="s1",
        )

    async def check_connection(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def fresh_state():
    settings = get_settings()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    for directory in (settings.IMAGES_DIR, settings.EXPORT_DIR):
        shutil.rmtree(directory, ignore_errors=True)
        os.makedirs(directory, exist_ok=True)
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def image_storage() -> FileStorage:
    return FileStorage(get_settings().IMAGES_DIR)


@pytest.fixture
def export_storage() -> FileStorage:
    return FileStorage(get_settings().EXPORT_DIR)


@pytest.fixture
def product_repo(db_session) -> SQLAlchemyProductRepository:
    return SQLAlchemyProductRepository(db_session, Product)


@pytest.fixture
def work_process_repo(db_session) -> SQLAlchemyWorkProcessRepository:
    return SQLAlchemyWorkProcessRepository(db_session, WorkProcess)


@pytest.fixture
def user(db_session) -> User:
    worker = User(username="田中太郎")
    db_session.add(worker)
    db_session.commit()
    db_session.refresh(worker)
    return worker


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def client(fake_analyzer):
    app.dependency_overrides[get_vision_analyzer] = lambda: fake_analyzer
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def categories(db_session) -> List[Category]:
    rows = [
        Category(code="100", category="メンズ", category2="トップス", category3="Tシャツ"),
        Category(code="101", category="メンズ", category2="トップス", category3="シャツ", category4="長袖"),
        Category(code="102", category="メンズ", category2="トップス", category3="シャツ", category4="半袖"),
        Category(code="200", category="メンズ", category2="パンツ", category3="デニム"),
        Category(code="300", category="レディース", category2="ワンピース", category3="ロング"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


def make_product(
    db_session,
    management_number: str,
    images: Optional[List[str]] = None,
    **fields,
) -> Product:
    product = Product(
        management_number=management_number,
        images=images if images is not None else [f"{management_number}_1.jpg"],
        candidate_titles=fields.pop("candidate_titles", []),
        category_list=fields.pop("category_list", []),
        **fields,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def product_factory(db_session):
    def factory(management_number: str, images: Optional[List[str]] = None, **fields) -> Product:
        return make_product(db_session, management_number, images, **fields)
    return factory
