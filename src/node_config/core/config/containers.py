# src/node_config/core/config/containers.py
"""
Containers seguros para uso concorrente.

O documento de configuração retornado pelo loader é lido (e eventualmente
alterado) por muitos componentes do servidor ao mesmo tempo. Por isso todo
container materializado pelo decoder, e todo default de coleção declarado
no schema, usa uma das variantes abaixo em vez de `list`, `dict` ou `set`.

Variantes:
    - ConcurrentList → copy-on-write: escritas substituem a lista interna
      sob lock; leituras e iteração usam um snapshot imutável
    - ConcurrentDict → MutableMapping protegido por lock; iteração sobre snapshot
    - ConcurrentSet  → MutableSet protegido por lock; iteração sobre snapshot

Invariantes:
    - Nenhum iterador é invalidado por escritas concorrentes
    - Toda operação de leitura-alteração-escrita (`remove`, `pop`,
      `popitem`, `clear`, `update`, operadores in place) executa inteira
      sob um único lock; nenhuma é herdada em passos dos mixins
    - Containers comparam igual aos equivalentes nativos com o mesmo conteúdo

Limites explícitos:
    - Sequências de chamadas do cliente não são atômicas entre si
    - Não protegem os objetos contidos
"""

from __future__ import annotations

import copy
import threading
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple


class ConcurrentList(MutableSequence):
    """Lista copy-on-write."""

    def __init__(self, items: Optional[Iterable[Any]] = None) -> None:
        self._lock = threading.Lock()
        self._items: Tuple[Any, ...] = tuple(items) if items is not None else ()

    def _replace(self, items: List[Any]) -> None:
        self._items = tuple(items)

    def __getitem__(self, index):
        items = self._items
        if isinstance(index, slice):
            return ConcurrentList(items[index])
        return items[index]

    def __setitem__(self, index, value) -> None:
        with self._lock:
            items = list(self._items)
            items[index] = value
            self._replace(items)

    def __delitem__(self, index) -> None:
        with self._lock:
            items = list(self._items)
            del items[index]
            self._replace(items)

    def insert(self, index: int, value: Any) -> None:
        with self._lock:
            items = list(self._items)
            items.insert(index, value)
            self._replace(items)

    def append(self, value: Any) -> None:
        with self._lock:
            self._items = self._items + (value,)

    def extend(self, values: Iterable[Any]) -> None:
        values = tuple(values)
        with self._lock:
            self._items = self._items + values

    def clear(self) -> None:
        with self._lock:
            self._items = ()

    def remove(self, value: Any) -> None:
        with self._lock:
            items = list(self._items)
            items.remove(value)
            self._replace(items)

    def pop(self, index: int = -1) -> Any:
        with self._lock:
            items = list(self._items)
            value = items.pop(index)
            self._replace(items)
            return value

    def reverse(self) -> None:
        with self._lock:
            self._items = self._items[::-1]

    def __iadd__(self, values: Iterable[Any]) -> "ConcurrentList":
        self.extend(values)
        return self

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConcurrentList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return list(self._items) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def snapshot(self) -> List[Any]:
        return list(self._items)

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ConcurrentList":
        return ConcurrentList(copy.deepcopy(list(self._items), memo))

    def __repr__(self) -> str:
        return f"ConcurrentList({list(self._items)!r})"


class ConcurrentDict(MutableMapping):
    """Mapeamento protegido por lock reentrante."""

    def __init__(self, items: Optional[Iterable[Tuple[Any, Any]]] = None, **kwargs: Any) -> None:
        self._lock = threading.RLock()
        self._data: Dict[Any, Any] = {}
        if items is not None:
            self._data.update(items)
        self._data.update(kwargs)

    def __getitem__(self, key: Any) -> Any:
        with self._lock:
            return self._data[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def __delitem__(self, key: Any) -> None:
        with self._lock:
            del self._data[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def get(self, key: Any, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        with self._lock:
            return self._data.setdefault(key, default)

    def pop(self, key: Any, *args: Any) -> Any:
        with self._lock:
            return self._data.pop(key, *args)

    def popitem(self) -> Tuple[Any, Any]:
        with self._lock:
            return self._data.popitem()

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def update(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._data.update(*args, **kwargs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConcurrentDict):
            return self.snapshot() == other.snapshot()
        if isinstance(other, dict):
            return self.snapshot() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def snapshot(self) -> Dict[Any, Any]:
        with self._lock:
            return dict(self._data)

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ConcurrentDict":
        return ConcurrentDict(copy.deepcopy(self.snapshot(), memo))

    def __repr__(self) -> str:
        return f"ConcurrentDict({self.snapshot()!r})"


class ConcurrentSet(MutableSet):
    """Conjunto protegido por lock reentrante."""

    def __init__(self, items: Optional[Iterable[Any]] = None) -> None:
        self._lock = threading.RLock()
        self._data: Set[Any] = set(items) if items is not None else set()

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> "ConcurrentSet":
        return cls(it)

    def add(self, value: Any) -> None:
        with self._lock:
            self._data.add(value)

    def discard(self, value: Any) -> None:
        with self._lock:
            self._data.discard(value)

    def remove(self, value: Any) -> None:
        with self._lock:
            self._data.remove(value)

    def pop(self) -> Any:
        with self._lock:
            return self._data.pop()

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    # operadores in place dos mixins iteram e alteram em passos separados
    def __ior__(self, it: Iterable[Any]) -> "ConcurrentSet":
        with self._lock:
            return super().__ior__(it)

    def __iand__(self, it: Iterable[Any]) -> "ConcurrentSet":
        with self._lock:
            return super().__iand__(it)

    def __ixor__(self, it: Iterable[Any]) -> "ConcurrentSet":
        with self._lock:
            return super().__ixor__(it)

    def __isub__(self, it: Iterable[Any]) -> "ConcurrentSet":
        with self._lock:
            return super().__isub__(it)

    def __contains__(self, value: object) -> bool:
        with self._lock:
            return value in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConcurrentSet):
            return self.snapshot() == other.snapshot()
        if isinstance(other, (set, frozenset)):
            return self.snapshot() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def snapshot(self) -> Set[Any]:
        with self._lock:
            return set(self._data)

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ConcurrentSet":
        return ConcurrentSet(copy.deepcopy(self.snapshot(), memo))

    def __repr__(self) -> str:
        return f"ConcurrentSet({self.snapshot()!r})"


def new_list(items: Optional[Iterable[Any]] = None) -> ConcurrentList:
    """
    Cria a lista concorrente usada para settings `ListOf(...)`.

    Usada como `default_factory` no schema: cada documento recebe uma
    instância própria, nunca compartilhada.
    """
    return ConcurrentList(items)


def new_dict(items: Optional[Iterable[Tuple[Any, Any]]] = None) -> ConcurrentDict:
    """Cria o mapeamento concorrente usado para settings `MapOf(...)`."""
    return ConcurrentDict(items)


def new_set(items: Optional[Iterable[Any]] = None) -> ConcurrentSet:
    """Cria o conjunto concorrente usado para settings `SetOf(...)`."""
    return ConcurrentSet(items)
