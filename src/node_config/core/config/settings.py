# src/node_config/core/config/settings.py
"""
Knobs de ambiente reconhecidos pelo loader de configuração.

Este módulo concentra os nomes das variáveis de ambiente, os nomes lógicos
default e a leitura única desses valores em uma estrutura imutável.

Variáveis reconhecidas:
    - NODE_CONFIG                  → localização do documento primário
    - NODE_CONFIG_OVERLAY          → localização do overlay
    - NODE_CONFIG_OVERLAY_DISABLE  → "true"/"false" (case-insensitive)
    - NODE_CONFIG_SEARCH_PATH      → diretórios de busca (separados por os.pathsep)

Invariantes:
    - Valores são lidos uma única vez por chamada de `read_settings`
    - Qualquer valor de NODE_CONFIG_OVERLAY_DISABLE diferente de true/false
      é um erro fatal

Limites explícitos:
    - Não resolve localizações (ver `resolver`)
    - Não lê arquivos
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .errors import InvalidOverrideError


DEFAULT_CONFIGURATION = "node.yaml"
DEFAULT_CONFIGURATION_OVERLAY = "node-overlay.yaml"

PROPKEY_CONFIG = "NODE_CONFIG"
PROPKEY_CONFIG_OVERLAY = "NODE_CONFIG_OVERLAY"
PROPKEY_CONFIG_OVERLAY_DISABLE = "NODE_CONFIG_OVERLAY_DISABLE"
PROPKEY_SEARCH_PATH = "NODE_CONFIG_SEARCH_PATH"


def default_search_path() -> Tuple[Path, ...]:
    """Diretórios consultados quando NODE_CONFIG_SEARCH_PATH está ausente: `./conf` e `.`."""
    cwd = Path.cwd()
    return (cwd / "conf", cwd)


@dataclass(frozen=True)
class LoaderSettings:
    """Valores efetivos dos knobs de ambiente, lidos na inicialização."""

    overlay_disabled: bool = False
    overlay_overridden: bool = False
    search_path: Tuple[Path, ...] = ()


def parse_overlay_disabled(value: Optional[str]) -> bool:
    """
    Interpreta o valor de NODE_CONFIG_OVERLAY_DISABLE.

    Raises:
        InvalidOverrideError: se o valor estiver presente e não for
            "true" ou "false" (case-insensitive).
    """
    if value is None:
        return False

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    raise InvalidOverrideError(
        f"Environment variable '{PROPKEY_CONFIG_OVERLAY_DISABLE}', when present, "
        f"should be set to 'true' or 'false'; it was set to '{value}'"
    )


def parse_search_path(value: Optional[str]) -> Tuple[Path, ...]:
    """
    Interpreta o valor de NODE_CONFIG_SEARCH_PATH.

    Entradas são separadas por `os.pathsep`; entradas vazias são
    ignoradas. Ausente, usa `default_search_path()`.
    """
    if value is None:
        return default_search_path()
    return tuple(Path(p) for p in value.split(os.pathsep) if p)


def read_settings(environ: Optional[Mapping[str, str]] = None) -> LoaderSettings:
    """
    Lê os knobs de ambiente e produz `LoaderSettings`.

    `overlay_overridden` registra se o operador pediu explicitamente uma
    localização de overlay diferente do nome default. O loader usa esse
    flag para decidir entre ignorar ou propagar um overlay ausente.

    Args:
        environ: mapeamento de variáveis; `os.environ` quando omitido.

    Raises:
        InvalidOverrideError: se NODE_CONFIG_OVERLAY_DISABLE for inválido.
    """
    env = os.environ if environ is None else environ

    overlay_name = env.get(PROPKEY_CONFIG_OVERLAY)
    overlay_overridden = overlay_name is not None and overlay_name != DEFAULT_CONFIGURATION_OVERLAY

    return LoaderSettings(
        overlay_disabled=parse_overlay_disabled(env.get(PROPKEY_CONFIG_OVERLAY_DISABLE)),
        overlay_overridden=overlay_overridden,
        search_path=parse_search_path(env.get(PROPKEY_SEARCH_PATH)),
    )
