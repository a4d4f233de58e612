"""Configuração de testes pytest."""
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar src ao path para importação dos módulos
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def no_sleep():
    """Neutraliza as esperas de backoff do retry e do ciclo de criação."""
    with patch("clubsheets.gateway._retry.time.sleep") as retry_sleep, \
            patch("clubsheets.tables.repository.time.sleep") as create_sleep:
        yield retry_sleep, create_sleep
