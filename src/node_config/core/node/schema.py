# src/node_config/core/node/schema.py
"""
Schema canônico do documento de configuração de um nó (`node.yaml`).

Tabela estática de settings consumida pelo decoder. Settings com default
não nulo são obrigatórios: podem ser omitidos, mas não anulados.
"""

from __future__ import annotations

from enum import Enum

from node_config.core.config.containers import new_dict, new_list, new_set
from node_config.core.config.schema import (
    ConfigDocument,
    ListOf,
    MapOf,
    ParameterizedClass,
    Schema,
    SetOf,
    Setting,
)


class DiskAccessMode(Enum):
    AUTO = "auto"
    MMAP = "mmap"
    MMAP_INDEX_ONLY = "mmap_index_only"
    STANDARD = "standard"


class CommitLogSync(Enum):
    PERIODIC = "periodic"
    BATCH = "batch"
    GROUP = "group"


class MemtableAllocationType(Enum):
    HEAP_BUFFERS = "heap_buffers"
    OFFHEAP_BUFFERS = "offheap_buffers"
    OFFHEAP_OBJECTS = "offheap_objects"


def _default_seed_provider() -> ParameterizedClass:
    provider = ParameterizedClass()
    provider.class_name = "node_config.seeds.SimpleSeedProvider"
    provider.parameters = new_dict({"seeds": "127.0.0.1:7000"})
    return provider


class EncryptionOptions(ConfigDocument):
    SCHEMA = Schema(
        Setting("enabled", bool, default=False),
        Setting("optional", bool, default=False),
        Setting("keystore", str, default="conf/.keystore"),
        Setting("keystore_password", str),
        Setting("truststore", str, default="conf/.truststore"),
        Setting("truststore_password", str),
        Setting("protocol", str, default="TLS"),
        Setting("cipher_suites", ListOf(str)),
        Setting("require_client_auth", bool, default=False),
    )


class NodeConfig(ConfigDocument):
    """Documento de configuração do nó servidor."""

    SCHEMA = Schema(
        Setting("cluster_name", str, default="Test Cluster"),
        Setting("num_tokens", int, default=16),
        Setting("initial_token", str),
        Setting("seed_provider", ParameterizedClass, default_factory=_default_seed_provider),
        Setting("listen_address", str),
        Setting("listen_interface", str),
        Setting("broadcast_address", str),
        Setting("rpc_address", str),
        Setting("storage_port", int, default=7000),
        Setting("ssl_storage_port", int, default=7001),
        Setting("native_transport_port", int, default=9042),
        Setting("endpoint_snitch", str, default="SimpleSnitch"),
        Setting("data_file_directories", ListOf(str), default_factory=new_list),
        Setting("commitlog_directory", str),
        Setting("hints_directory", str),
        Setting("saved_caches_directory", str),
        Setting("commitlog_sync", CommitLogSync, default=CommitLogSync.PERIODIC),
        Setting("commitlog_sync_period_in_ms", int, default=10000),
        Setting("disk_access_mode", DiskAccessMode, default=DiskAccessMode.AUTO),
        Setting("memtable_allocation_type", MemtableAllocationType, default=MemtableAllocationType.HEAP_BUFFERS),
        Setting("concurrent_reads", int, default=32),
        Setting("concurrent_writes", int, default=32),
        Setting("phi_convict_threshold", float, default=8.0),
        Setting("auto_snapshot", bool, default=True),
        Setting("hinted_handoff_enabled", bool, default=True),
        Setting("hinted_handoff_disabled_datacenters", SetOf(str), default_factory=new_set),
        Setting("authenticator", str, default="AllowAllAuthenticator"),
        Setting("authorizer", str, default="AllowAllAuthorizer"),
        Setting("back_pressure_strategy", ParameterizedClass),
        Setting("server_encryption_options", EncryptionOptions, default_factory=EncryptionOptions),
        Setting("client_encryption_options", EncryptionOptions, default_factory=EncryptionOptions),
        Setting("table_properties", MapOf(str, str), default_factory=new_dict),
    )
