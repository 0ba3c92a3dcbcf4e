# src/node_config/core/config/schema.py
"""
Descritor explícito de schema para documentos de configuração.

Cada documento é uma subclasse de `ConfigDocument` que declara uma tabela
estática `SCHEMA` mapeando nome do setting → tipo de valor + default. O
decoder consulta apenas essa tabela; nenhuma introspecção de anotações
é necessária.

Tipos de valor suportados:
    - escalares: str, int, float, bool
    - subclasses de Enum (por nome ou valor do membro)
    - subclasses de ConfigDocument (documentos aninhados)
    - ListOf(T), SetOf(T), MapOf(K, V)

Regras:
    - Um setting cujo default não é None é *obrigatório*: atribuir null
      explicitamente a ele é um erro de validação
    - Defaults de coleção são sempre containers concorrentes
    - Cada documento lembra quais settings estavam presentes na fonte

Limites explícitos:
    - Não faz parse de YAML
    - Não valida ranges nem consistência entre settings
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterator, Optional, Set, Tuple

from .containers import ConcurrentDict, ConcurrentList, ConcurrentSet


@dataclass(frozen=True)
class ListOf:
    element: Any


@dataclass(frozen=True)
class SetOf:
    element: Any


@dataclass(frozen=True)
class MapOf:
    key: Any
    value: Any


_NO_DEFAULT = object()


@dataclass(frozen=True)
class Setting:
    """
    Entrada da tabela de schema.

    Use `default` para valores imutáveis e `default_factory` para
    coleções e documentos aninhados. Sem nenhum dos dois, o default é None
    (setting anulável).
    """

    name: str
    type: Any
    default: Any = _NO_DEFAULT
    default_factory: Optional[Callable[[], Any]] = None

    def make_default(self) -> Any:
        """Novo valor default; fábricas são chamadas a cada documento."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is _NO_DEFAULT:
            return None
        return self.default

    @property
    def nullable(self) -> bool:
        """Setting sem default não nulo: aceita null explícito na fonte."""
        return self.make_default() is None


class Schema:
    """Tabela estática nome → Setting, na ordem de declaração."""

    def __init__(self, *settings: Setting) -> None:
        self.settings: Tuple[Setting, ...] = tuple(settings)
        self._by_name: Dict[str, Setting] = {s.name: s for s in settings}
        if len(self._by_name) != len(self.settings):
            raise ValueError("duplicate setting name in schema")

    def get(self, name: str) -> Optional[Setting]:
        """Setting declarado com esse nome, ou None se a chave é desconhecida."""
        return self._by_name.get(name)

    def names(self) -> Tuple[str, ...]:
        """Nomes dos settings na ordem de declaração."""
        return tuple(s.name for s in self.settings)

    def __iter__(self) -> Iterator[Setting]:
        return iter(self.settings)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name


class ConfigDocument:
    """
    Registro tipado com schema fixo.

    Instâncias recém-criadas contêm os defaults do schema. Atributos fora
    do schema não podem ser atribuídos.
    """

    SCHEMA: ClassVar[Schema] = Schema()

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "_explicit", set())
        for s in self.SCHEMA:
            object.__setattr__(self, s.name, s.make_default())
        for name, value in values.items():
            self.set_explicit(name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in self.SCHEMA:
            raise AttributeError(f"{type(self).__name__} has no setting '{name}'")
        object.__setattr__(self, name, value)

    def set_explicit(self, name: str, value: Any) -> None:
        """
        Atribui `value` e marca o setting como presente na fonte.

        Usado pelo decoder para toda chave lida e pelo overlay para toda
        chave copiada. Atribuições diretas (`doc.x = v`) não marcam.

        Raises:
            AttributeError: se `name` não pertence ao schema.
        """
        setattr(self, name, value)
        self._explicit.add(name)

    def explicit_settings(self) -> Set[str]:
        """Cópia do conjunto de settings presentes na fonte."""
        return set(self._explicit)

    def is_explicit(self, name: str) -> bool:
        return name in self._explicit

    def to_dict(self) -> Dict[str, Any]:
        """
        Representação nativa (dict, list, str...) de todos os settings.

        Invariantes:
            - Enums viram o nome do membro
            - Conjuntos viram listas ordenadas, para hashing determinístico
        """
        return {s.name: to_plain(getattr(self, s.name)) for s in self.SCHEMA}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, n) == getattr(other, n) for n in self.SCHEMA.names())

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ConfigDocument":
        clone = type(self).__new__(type(self))
        object.__setattr__(clone, "_explicit", set(self._explicit))
        for name in self.SCHEMA.names():
            object.__setattr__(clone, name, copy.deepcopy(getattr(self, name), memo))
        return clone

    def __repr__(self) -> str:
        body = ", ".join(f"{n}={getattr(self, n)!r}" for n in self.SCHEMA.names())
        return f"{type(self).__name__}({body})"


class ParameterizedClass(ConfigDocument):
    """Nome de classe e mapa livre de parâmetros string → string."""

    SCHEMA = Schema(
        Setting("class_name", str),
        Setting("parameters", MapOf(str, str)),
    )


def to_plain(value: Any) -> Any:
    """Converte documentos e containers concorrentes em estruturas nativas."""
    if isinstance(value, ConfigDocument):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (ConcurrentList, list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (ConcurrentSet, set, frozenset)):
        return sorted((to_plain(v) for v in value), key=repr)
    if isinstance(value, (ConcurrentDict, dict)):
        return {k: to_plain(v) for k, v in value.items()}
    return value


__all__ = [
    "ConfigDocument",
    "ListOf",
    "MapOf",
    "ParameterizedClass",
    "Schema",
    "SetOf",
    "Setting",
    "to_plain",
]
