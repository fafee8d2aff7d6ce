"""
Serviço para cálculo do score de distância das posições
(proxy de percurso a partir da doca: rua domina, baia desempata)
"""
import os
from dotenv import load_dotenv
from services.codecs import ordinal

load_dotenv()


class DistanceService:
    """Calcula score de distância com custos configuráveis"""

    # Custos padrão (podem ser sobrescritos via .env)
    CUSTO_POR_RUA = int(os.getenv("CUSTO_POR_RUA", "1000"))
    CUSTO_POR_BAIA = int(os.getenv("CUSTO_POR_BAIA", "1"))

    @staticmethod
    def distance_score(row, bay) -> int:
        """
        Score monotônico em (rua, baia), ordenação row-major:
        (rua - 1) * CUSTO_POR_RUA + (baia - 1) * CUSTO_POR_BAIA
        """
        row_score = (ordinal(row) - 1) * DistanceService.CUSTO_POR_RUA
        bay_score = (ordinal(bay) - 1) * DistanceService.CUSTO_POR_BAIA
        return row_score + bay_score

    @staticmethod
    def location_score(location) -> int:
        return DistanceService.distance_score(location.row, location.bay)
