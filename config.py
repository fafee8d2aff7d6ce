"""
Configurações da aplicação carregadas do ambiente (.env)
"""
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storage/app.db")

# Segundos que o SQLite espera pelo lock de escrita antes de falhar
SQLITE_TIMEOUT = float(os.getenv("SQLITE_TIMEOUT", "30"))

# "strict": teto de peso por nível é obrigatório
# "soft": níveis superiores sem teto, apenas preferência por altura
CAPACITY_POLICY = os.getenv("CAPACITY_POLICY", "strict")

DEFAULT_RACK_TYPE = os.getenv("DEFAULT_RACK_TYPE", "standard")

RECENT_MOVEMENTS_LIMIT = int(os.getenv("RECENT_MOVEMENTS_LIMIT", "20"))
MAX_MOVEMENTS_LIMIT = int(os.getenv("MAX_MOVEMENTS_LIMIT", "500"))

DEFAULT_OPERATOR = os.getenv("DEFAULT_OPERATOR", "Unknown")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Produtos exibidos no catálogo (mais usados recentemente)
PRODUCT_LIST_LIMIT = int(os.getenv("PRODUCT_LIST_LIMIT", "50"))
