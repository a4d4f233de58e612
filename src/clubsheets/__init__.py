"""
clubsheets

Store de entidades do clube sobre o Google Sheets: sócios, mensalidades,
salas, mesas, reservas e usuários, cada tipo em sua própria aba.

Este módulo expõe as principais classes para uso externo:

- Config: Configuração obtida de variáveis de ambiente
- Store: Repositórios de todos os tipos, já ligados entre si
- open_store: Monta o store sobre qualquer superfície tabular
"""

from .__version__ import __version__
from .config import Config
from .store import Store, memory_api, open_store

__all__ = [
    '__version__',
    'Config',
    'Store',
    'open_store',
    'memory_api',
]
