# src/node_config/core/config/loader.py
"""
Loader canônico de configuração do nó.

Este módulo é o único ponto de entrada público para obter a configuração
efetiva de um nó. Ele orquestra resolução, leitura, decode validado e
overlay, e traduz falhas internas para a taxonomia de `errors`.

A configuração é resolvida a partir de:
    - um documento primário (obrigatório)
    - um documento de overlay (opcional, desabilitável)

Sequência de `load_config()`:
    1. Carregar o primário; qualquer achado de validação é fatal
    2. Se overlays não estiverem desabilitados, carregar o overlay:
        - ausente e com nome default → ignorado silenciosamente
        - ausente e pedido explicitamente pelo operador → fatal
        - presente → aplicado sobre o primário
    3. Retornar o primário (possivelmente com overlay)

Decisões arquiteturais:
    - Localizações e flag de overlay são resolvidos uma única vez, na
      inicialização (`resolve_locations`), e passados ao loader
    - A decisão de ignorar um overlay ausente usa o flag
      `overlay_overridden`, calculado na resolução, e não comparação de
      localizações já resolvidas
    - O loader padrão do processo é construído uma vez e mantido em cache

Invariantes:
    - Todo documento retornado passou por `ValidationReport.check`
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não recarrega configuração de outra localização dentro do mesmo
      processo (exceto via `reset_default_loader`)
    - Não configura handlers de logging
"""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from typing import Generic, Mapping, Optional, Type, TypeVar, Union

from node_config.core.node.schema import NodeConfig

from .decoder import decode
from .errors import ResourceNotFoundError, UnprefixedLocationError
from .hashing import compute_config_hash
from .merge import overlay
from .resolver import ResourceLocation, read_resource, resolve_location
from .schema import ConfigDocument
from .settings import (
    DEFAULT_CONFIGURATION,
    DEFAULT_CONFIGURATION_OVERLAY,
    PROPKEY_CONFIG,
    PROPKEY_CONFIG_OVERLAY,
    read_settings,
)


logger = logging.getLogger(__name__)

D = TypeVar("D", bound=ConfigDocument)

OverlayNotFound = (ResourceNotFoundError, UnprefixedLocationError)


@dataclass(frozen=True)
class ResolvedLocations:
    """
    Resultado da resolução de inicialização.

    Quando o overlay não pôde ser localizado, `overlay` é None e o erro
    fica em `overlay_error`, para que o loader decida entre ignorar ou
    propagar.
    """

    primary: ResourceLocation
    overlay: Optional[ResourceLocation] = None
    overlay_error: Optional[Exception] = None
    overlay_disabled: bool = False
    overlay_overridden: bool = False


def resolve_locations(environ: Optional[Mapping[str, str]] = None) -> ResolvedLocations:
    """
    Resolve flag de overlay, documento primário e overlay.

    Raises:
        InvalidOverrideError: se NODE_CONFIG_OVERLAY_DISABLE for inválido.
        UnprefixedLocationError / ResourceNotFoundError: se o primário não
            puder ser localizado.
    """
    settings = read_settings(environ)

    primary = resolve_location(
        PROPKEY_CONFIG,
        DEFAULT_CONFIGURATION,
        environ=environ,
        search_path=settings.search_path,
    )

    if settings.overlay_disabled:
        return ResolvedLocations(primary=primary, overlay_disabled=True)

    try:
        overlay_location = resolve_location(
            PROPKEY_CONFIG_OVERLAY,
            DEFAULT_CONFIGURATION_OVERLAY,
            environ=environ,
            search_path=settings.search_path,
        )
    except OverlayNotFound as e:
        return ResolvedLocations(
            primary=primary,
            overlay_error=e,
            overlay_overridden=settings.overlay_overridden,
        )

    return ResolvedLocations(
        primary=primary,
        overlay=overlay_location,
        overlay_overridden=settings.overlay_overridden,
    )


class YamlConfigurationLoader(Generic[D]):
    """
    Carrega, valida e aplica overlay sobre documentos YAML.

    Args:
        locations: localizações resolvidas na inicialização.
        document_type: subclasse de `ConfigDocument` alvo (default: `NodeConfig`).
    """

    def __init__(
        self,
        locations: ResolvedLocations,
        document_type: Type[D] = NodeConfig,  # type: ignore[assignment]
    ) -> None:
        self.locations = locations
        self.document_type = document_type

    def load_config(self, location: Union[ResourceLocation, str, None] = None) -> D:
        """
        Carrega a configuração.

        Sem argumento, aplica a sequência primário + overlay. Com uma
        localização, carrega exatamente aquele recurso, sem overlay.

        Raises:
            ConfigurationError: (ou subclasse) em qualquer falha.
        """
        if location is not None:
            if isinstance(location, str):
                location = ResourceLocation.from_string(location)
            return self._load_location(location)

        config = self._load_location(self.locations.primary)

        if not self.locations.overlay_disabled:
            try:
                other = self._load_overlay()
            except OverlayNotFound as e:
                if self.locations.overlay_overridden:
                    # o operador pediu um overlay explicitamente; ausência é fatal
                    raise
                logger.debug("No configuration overlay applied: %s", e)
            else:
                overlay(config, other)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Effective configuration hash: %s", compute_config_hash(config))
        return config

    def _load_overlay(self) -> D:
        if self.locations.overlay is None:
            raise self.locations.overlay_error or ResourceNotFoundError(
                "No configuration overlay location was resolved.",
                value=DEFAULT_CONFIGURATION_OVERLAY,
            )
        return self._load_location(self.locations.overlay)

    def _load_location(self, location: ResourceLocation) -> D:
        logger.debug("Loading settings from %s", location)
        data = read_resource(location)
        result = decode(data, self.document_type, source=location.url)
        result.report.check(location.url)
        return result.document


_default_loader_lock = threading.Lock()


@functools.lru_cache(maxsize=None)
def _build_default_loader() -> YamlConfigurationLoader[NodeConfig]:
    return YamlConfigurationLoader(resolve_locations())


def default_loader() -> YamlConfigurationLoader[NodeConfig]:
    """
    Loader do processo, resolvido uma única vez a partir de `os.environ`.

    Invariantes:
        - Chamadas concorrentes na inicialização executam
          `resolve_locations` exatamente uma vez e recebem a mesma instância
        - Uma falha de resolução não é cacheada; a próxima chamada tenta de novo
    """
    with _default_loader_lock:
        return _build_default_loader()


def reset_default_loader() -> None:
    """
    Descarta o loader do processo.

    A próxima chamada a `default_loader` (ou `load_config`) relê o
    ambiente e resolve as localizações novamente. Usado em testes e em
    reinicializações controladas do host.
    """
    with _default_loader_lock:
        _build_default_loader.cache_clear()


def load_config(location: Union[ResourceLocation, str, None] = None) -> NodeConfig:
    """
    Carrega a configuração efetiva do nó usando o loader do processo.

    Args:
        location: quando informado, carrega apenas esse recurso.

    Returns:
        NodeConfig: configuração validada (e com overlay, se aplicável).
    """
    return default_loader().load_config(location)
