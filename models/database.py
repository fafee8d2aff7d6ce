from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from config import DATABASE_URL, SQLITE_TIMEOUT


def build_engine(url: str):
    """Cria engine; SQLite precisa check_same_thread=False e timeout de lock"""
    connect_args = {}
    if "sqlite" in url:
        connect_args = {"check_same_thread": False, "timeout": SQLITE_TIMEOUT}
    return create_engine(url, connect_args=connect_args, echo=False)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency para FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
