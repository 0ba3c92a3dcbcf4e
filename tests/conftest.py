# tests/conftest.py
"""
Fixtures compartilhados para testes do node-config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos YAML mínimos e determinísticos (primário e overlay)
- uma factory para gravar documentos em diretório temporário
- uma factory de mapeamentos de ambiente isolados de `os.environ`

Decisões arquiteturais:
    - Variáveis de ambiente são passadas como dicionários explícitos,
      nunca alterando o ambiente do processo
    - O search path aponta sempre para `tmp_path`
    - O cache do loader padrão é limpo ao final de cada teste

Invariantes:
    - Nenhuma fixture depende de arquivos fora de `tmp_path`
    - Nenhuma fixture acessa rede

Limites explícitos:
    - Não substitui testes de integração com o processo servidor
"""

from pathlib import Path
from typing import Callable, Dict, Optional

import pytest


@pytest.fixture
def primary_yaml() -> str:
    """
    Documento primário semelhante ao uso real.

    Apenas settings conhecidos, nenhum null em setting obrigatório.
    """
    return """\
cluster_name: X
num_tokens: 8
seed_provider:
  class_name: node_config.seeds.SimpleSeedProvider
  parameters:
    seeds: "10.0.0.1,10.0.0.2"
data_file_directories:
  - /var/lib/node/data
commitlog_directory: /var/lib/node/commitlog
disk_access_mode: mmap
"""


@pytest.fixture
def overlay_yaml() -> str:
    """Overlay que redefine apenas o nome do cluster."""
    return """\
cluster_name: Y
"""


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory: grava `content` em `tmp_path / name` e devolve o caminho."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_environ(tmp_path: Path) -> Callable[..., Dict[str, str]]:
    """
    Factory de ambiente isolado.

    O search path sempre aponta para `tmp_path`; os demais knobs só são
    incluídos quando informados.
    """

    def _environ(
        *,
        config: Optional[str] = None,
        overlay: Optional[str] = None,
        overlay_disable: Optional[str] = None,
    ) -> Dict[str, str]:
        env = {"NODE_CONFIG_SEARCH_PATH": str(tmp_path)}
        if config is not None:
            env["NODE_CONFIG"] = config
        if overlay is not None:
            env["NODE_CONFIG_OVERLAY"] = overlay
        if overlay_disable is not None:
            env["NODE_CONFIG_OVERLAY_DISABLE"] = overlay_disable
        return env

    return _environ


@pytest.fixture(autouse=True)
def _reset_default_loader():
    yield
    from node_config.core.config.loader import reset_default_loader

    reset_default_loader()
