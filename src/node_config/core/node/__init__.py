# src/node_config/core/node/__init__.py
"""Schema do documento de configuração de um nó."""

from .schema import (  # noqa: F401
    CommitLogSync,
    DiskAccessMode,
    EncryptionOptions,
    MemtableAllocationType,
    NodeConfig,
)
