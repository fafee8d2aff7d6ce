"""
Fixtures pytest da suíte.

- db: sessão SQLite em memória (StaticPool), tabelas recriadas por teste
- session_factory: SQLite em arquivo, para testes com threads concorrentes
- client: TestClient da aplicação com get_db apontando para o banco de teste
- make_location / make_item: atalhos para montar cenários
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  registra todos os modelos
from models.database import Base, build_engine, get_db
from models.location import Location
from services.item_service import ItemService
from services.location_service import LocationService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def session_factory(tmp_path):
    """Banco em arquivo: cada thread abre sua própria conexão"""
    engine = build_engine(f"sqlite:///{tmp_path / 'concurrency.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def client(engine):
    from fastapi.testclient import TestClient
    from main import app

    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_location():
    def _make(db, row="A", bay=1, level=1, position=1, rack_type="standard", **kwargs) -> Location:
        return LocationService.create_location(
            db, row=row, bay=bay, level=level, position=position, rack_type=rack_type, **kwargs
        )
    return _make


@pytest.fixture
def make_item():
    counter = {"n": 0}

    def _make(db, weight=100.0, item_code="SKU-1", category="coil", system_code=None):
        counter["n"] += 1
        return ItemService.register_item(
            db,
            item_code=item_code,
            system_code=system_code or f"SYS-{counter['n']:04d}",
            category=category,
            weight=weight,
        )
    return _make
