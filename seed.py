"""
Script para popular o banco com a topologia inicial:
- Ruas A e B, baias 01..10, níveis 0..4, 3 posições por baia
- Rack standard (teto por nível: 1500/1000/750/500 kg; chão sem limite)
- Total: 2 ruas × 10 baias × 3 posições × 5 níveis = 300 posições
"""
import logging
import os
from sqlalchemy.orm import Session
from models.database import SessionLocal, engine, Base
from models.location import Location
from services.location_service import LocationService

logger = logging.getLogger(__name__)

SEED_ROWS = ["A", "B"]
SEED_BAY_START = 1
SEED_BAY_END = 10
SEED_MAX_LEVEL = 4


def seed_database():
    """Popula o banco com as posições iniciais"""
    os.makedirs("storage", exist_ok=True)
    Base.metadata.create_all(bind=engine)

    db: Session = SessionLocal()
    try:
        # Verificar se já existe dados
        if db.query(Location).count() > 0:
            logger.warning("Banco já possui posições. Use --force para recriar.")
            return

        total = 0
        for row in SEED_ROWS:
            result = LocationService.generate_locations(
                db,
                row=row,
                bay_start=SEED_BAY_START,
                bay_end=SEED_BAY_END,
                max_level=SEED_MAX_LEVEL,
                rack_type="standard",
            )
            total += len(result["created"])

        logger.info(f"Seed concluído: {len(SEED_ROWS)} ruas, {total} posições criadas")

    except Exception:
        db.rollback()
        logger.exception("Erro ao fazer seed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import sys
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    if "--force" in sys.argv:
        # Deletar tudo e recriar
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        logger.warning("Banco recriado do zero")

    seed_database()
