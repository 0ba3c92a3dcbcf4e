# src/node_config/core/config/__init__.py
"""
Camada de configuração do node-config.

Este pacote contém as estruturas e utilitários responsáveis por resolver,
carregar, validar e aplicar overlay sobre o documento de configuração de
um nó servidor.

Responsabilidades do pacote:
    - Resolução de localização (variável de ambiente → URL → search path)
    - Decode de YAML guiado por schema explícito
    - Registro de chaves desconhecidas e de settings obrigatórios anulados
    - Materialização de coleções seguras para uso concorrente
    - Overlay do documento opcional sobre o primário
    - Hash canônico da configuração efetiva

Princípios fundamentais:
    - Todos os problemas de validação são reportados em uma única passada
    - Overlay default ausente é benigno; overlay pedido explicitamente e
      ausente é fatal
    - Mensagens de erro dizem ao operador exatamente o que corrigir

Limites explícitos:
    - Não é um sistema de templates ou substituição de variáveis
    - Não suporta cadeias de overlay
    - Não valida semântica entre settings
"""

from .errors import (  # noqa: F401
    ConfigSyntaxError,
    ConfigurationError,
    InvalidConfigurationError,
    InvalidOverrideError,
    ResourceNotFoundError,
    UnprefixedLocationError,
)
from .decoder import DecodeResult, ValidationReport, decode  # noqa: F401
from .hashing import compute_config_hash  # noqa: F401
from .loader import (  # noqa: F401
    ResolvedLocations,
    YamlConfigurationLoader,
    default_loader,
    load_config,
    reset_default_loader,
    resolve_locations,
)
from .merge import overlay  # noqa: F401
from .resolver import ResourceLocation, read_resource, resolve_location  # noqa: F401
from .schema import ConfigDocument, ListOf, MapOf, ParameterizedClass, Schema, SetOf, Setting  # noqa: F401
