# src/node_config/core/config/resolver.py
"""
Resolução de localização de recursos de configuração.

Este módulo transforma um nome lógico (default ou sobrescrito por variável
de ambiente) em uma `ResourceLocation` concreta e legível.

Estratégias, em ordem (a primeira que funcionar vence):
    1. Ler o override da variável de ambiente; se ausente, usar o default
    2. Abrir o valor diretamente como URL e fechar o stream em seguida
       (URLs bem formadas mas inalcançáveis são rejeitadas aqui)
    3. Procurar o valor como nome relativo nos diretórios do search path
    4. Falhar com mensagem específica:
        - sem prefixo `file://` → UnprefixedLocationError
        - com prefixo, mas inexistente → ResourceNotFoundError

Cada falha implica uma correção diferente por parte do operador, por isso
as mensagens são distintas.

Limites explícitos:
    - Não faz parse do conteúdo
    - Não decide se a ausência é tolerável (papel do loader)
    - Não impõe timeout à abertura do stream
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import BinaryIO, Iterable, Mapping, Optional, cast
from urllib.request import urlopen

from .errors import ResourceNotFoundError, UnprefixedLocationError


logger = logging.getLogger(__name__)

LOCAL_FILE_PREFIX = "file:" + os.sep + os.sep


@dataclass(frozen=True)
class ResourceLocation:
    """Localização resolvida (`url`) e o nome lógico que a originou."""

    url: str
    name: str

    @classmethod
    def from_string(cls, value: str) -> "ResourceLocation":
        """URLs são usadas como estão; caminhos viram URLs `file://` absolutas."""
        if "://" in value:
            return cls(url=value, name=value)
        return cls(url=Path(value).resolve().as_uri(), name=value)

    def open(self) -> BinaryIO:
        """
        Abre um stream binário para a URL resolvida.

        O chamador é responsável por fechar o stream (use `with`).

        Raises:
            OSError / ValueError: se a URL deixou de ser legível.
        """
        return cast(BinaryIO, urlopen(self.url))

    def read(self) -> bytes:
        """Lê todo o conteúdo e fecha o stream."""
        with self.open() as stream:
            return stream.read()

    def __str__(self) -> str:
        return self.url


def _open_direct(value: str) -> Optional[ResourceLocation]:
    """
    Segunda estratégia: trata `value` como URL e tenta abri-la.

    O stream é fechado imediatamente; apenas a legibilidade importa.
    Qualquer falha (esquema desconhecido, arquivo inexistente, host
    inalcançável) significa "não resolvido" e é registrada em DEBUG.

    Returns:
        ResourceLocation ou None.
    """
    try:
        with urlopen(value):
            pass
    except Exception as e:  # noqa: BLE001
        logger.debug("Cannot open %s directly: %s", value, e)
        return None
    return ResourceLocation(url=value, name=value)


def _find_on_search_path(value: str, search_path: Iterable[Path]) -> Optional[ResourceLocation]:
    """
    Terceira estratégia: procura `value` como nome relativo no search path.

    Invariantes:
        - URLs e caminhos absolutos nunca são procurados aqui
        - O primeiro diretório que contém um arquivo regular vence

    Returns:
        ResourceLocation com URL `file://` absoluta, ou None.
    """
    if "://" in value or PurePath(value).is_absolute():
        return None

    for directory in search_path:
        candidate = Path(directory) / value
        if candidate.is_file():
            return ResourceLocation(url=candidate.resolve().as_uri(), name=value)
    return None


def resolve_location(
    property_key: str,
    default_name: str,
    *,
    environ: Optional[Mapping[str, str]] = None,
    search_path: Iterable[Path] = (),
) -> ResourceLocation:
    """
    Resolve o nome lógico associado a `property_key` em uma localização legível.

    Args:
        property_key: variável de ambiente que pode sobrescrever o nome.
        default_name: nome lógico usado quando a variável está ausente.
        environ: mapeamento de variáveis; `os.environ` quando omitido.
        search_path: diretórios consultados na terceira estratégia.

    Returns:
        ResourceLocation: localização resolvida.

    Raises:
        UnprefixedLocationError: se nada foi encontrado e o valor não possui
            o prefixo `file://`.
        ResourceNotFoundError: se nada foi encontrado apesar do prefixo.
    """
    env = os.environ if environ is None else environ
    value = env.get(property_key, default_name)

    location = _open_direct(value) or _find_on_search_path(value, search_path)
    if location is None:
        required = LOCAL_FILE_PREFIX
        if not value.startswith(required):
            raise UnprefixedLocationError(
                f"Expecting URI in variable: [{property_key}]. Found [{value}].",
                hint=(
                    f"Please prefix the file with [{required}{os.sep}] for local files "
                    f"and [{required}<server>{os.sep}] for remote files."
                ),
                property_key=property_key,
                value=value,
            )
        raise ResourceNotFoundError(
            f"Cannot locate {value}.",
            hint=f"If this is a local file, please confirm you've provided {required}{os.sep} as a URI prefix.",
            value=value,
        )

    logger.info("Configuration location: %s", location)
    return location


def read_resource(location: ResourceLocation) -> bytes:
    """
    Lê todos os bytes de uma localização já resolvida.

    Raises:
        ResourceNotFoundError: se o recurso deixou de ser legível desde a
            resolução.
    """
    try:
        return location.read()
    except (OSError, ValueError) as e:
        raise ResourceNotFoundError(
            f"Cannot read {location.url} (resolved from {location.name}): {e}",
            value=location.name,
        ) from e
