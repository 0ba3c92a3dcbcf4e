# src/node_config/__init__.py
"""
node-config: carregamento estrito da configuração YAML de um nó servidor.

Este pacote raiz expõe o ponto de entrada público: `load_config()` aplica
a resolução de localização do documento primário e do overlay opcional,
valida ambos contra o schema e devolve a configuração efetiva; e
`load_config(location)` carrega exatamente um recurso.

Arquitetura em alto nível:
    - core.config → resolver, decoder, containers concorrentes, overlay, loader
    - core.node   → schema `NodeConfig`
"""

from .core.config import (
    ConfigurationError,
    ConfigSyntaxError,
    InvalidConfigurationError,
    InvalidOverrideError,
    ResourceNotFoundError,
    UnprefixedLocationError,
    YamlConfigurationLoader,
    load_config,
    resolve_locations,
)
from .core.node import NodeConfig

__all__ = [
    "ConfigSyntaxError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "InvalidOverrideError",
    "NodeConfig",
    "ResourceNotFoundError",
    "UnprefixedLocationError",
    "YamlConfigurationLoader",
    "load_config",
    "resolve_locations",
]
