# tests/core/config/test_decoder.py
"""
Testes do decoder de YAML com verificação de schema.

Este módulo valida que o decoder:
- produz relatório vazio para documentos válidos
- coleta todas as chaves desconhecidas em uma única passada
- registra e ainda atribui nulls explícitos em settings obrigatórios
- aceita null em settings anuláveis sem registrar nada
- decodifica entrada vazia no documento default
- converte valores segundo o schema (escalares, enums, documentos,
  coleções e o mapa de parâmetros string → string)
- materializa coleções concorrentes
- rejeita YAML malformado com `ConfigSyntaxError`

Decisões arquiteturais:
    - O alvo dos testes é `NodeConfig`, o schema real do nó
    - Entradas são bytes, como lidas de um recurso

Limites explícitos:
    - Não valida resolução de localização
    - Não valida overlay
"""

import pytest

from node_config.core.config.containers import ConcurrentDict, ConcurrentList, ConcurrentSet
from node_config.core.config.decoder import ValidationReport, decode
from node_config.core.config.errors import ConfigSyntaxError, InvalidConfigurationError
from node_config.core.node.schema import DiskAccessMode, NodeConfig


def _decode(text: str):
    return decode(text.encode("utf-8"), NodeConfig, source="test.yaml")


def test_valid_document_has_empty_report(primary_yaml):
    """Um documento válido é decodificado sem achados."""
    result = _decode(primary_yaml)

    assert result.report.is_empty()
    doc = result.document
    assert doc.cluster_name == "X"
    assert doc.num_tokens == 8
    assert doc.disk_access_mode is DiskAccessMode.MMAP
    assert doc.data_file_directories == ["/var/lib/node/data"]
    assert doc.seed_provider.parameters == {"seeds": "10.0.0.1,10.0.0.2"}


def test_empty_input_decodes_to_defaults():
    """
    Verifica que entrada vazia produz o documento default.

    Invariantes:
        - O documento nunca é None
        - O documento é igual a `NodeConfig()`
        - O relatório é vazio
    """
    for data in (b"", b"\n", b"# only a comment\n"):
        result = decode(data, NodeConfig)
        assert result.document is not None
        assert result.document == NodeConfig()
        assert result.report.is_empty()


def test_unknown_keys_are_all_collected():
    """
    Verifica que chaves desconhecidas são coletadas sem abortar o decode.

    Invariantes:
        - Todas as chaves desconhecidas aparecem no relatório
        - Chaves aninhadas usam caminho pontuado
        - Settings conhecidos do mesmo documento continuam decodificados
    """
    result = _decode(
        """\
not_a_real_setting: 1
cluster_name: X
another_bogus: true
client_encryption_options:
  enabled: true
  bogus_nested: 3
"""
    )

    assert result.report.unknown_keys == {
        "not_a_real_setting",
        "another_bogus",
        "client_encryption_options.bogus_nested",
    }
    assert result.document.cluster_name == "X"
    assert result.document.client_encryption_options.enabled is True


def test_null_on_required_setting_is_recorded_and_assigned():
    """Null em setting obrigatório é registrado e ainda assim atribuído."""
    result = _decode("cluster_name: null\nnum_tokens: ~\n")

    assert result.report.nullified_required_keys == {"cluster_name", "num_tokens"}
    assert result.report.unknown_keys == set()
    assert result.document.cluster_name is None
    assert result.document.num_tokens is None


def test_null_on_nullable_setting_is_accepted():
    """Null em setting anulável é aceito e conta como presente."""
    result = _decode("listen_address: null\nback_pressure_strategy: null\n")

    assert result.report.is_empty()
    assert result.document.listen_address is None
    assert result.document.is_explicit("listen_address")


def test_absent_settings_keep_defaults_and_are_not_explicit():
    """Settings ausentes mantêm o default e não contam como presentes."""
    result = _decode("cluster_name: X\n")

    doc = result.document
    assert doc.explicit_settings() == {"cluster_name"}
    assert doc.num_tokens == NodeConfig().num_tokens
    assert doc.seed_provider == NodeConfig().seed_provider


def test_parameterized_class_parameters_are_strings():
    """Parâmetros de classe parametrizada são sempre convertidos para string."""
    result = _decode(
        """\
back_pressure_strategy:
  class_name: node_config.RateBasedBackPressure
  parameters:
    high_ratio: 0.9
    factor: 5
    flow: FAST
    enabled: true
"""
    )

    strategy = result.document.back_pressure_strategy
    assert strategy.class_name == "node_config.RateBasedBackPressure"
    assert strategy.parameters == {
        "high_ratio": "0.9",
        "factor": "5",
        "flow": "FAST",
        "enabled": "true",
    }
    assert all(isinstance(v, str) for v in strategy.parameters.values())


def test_collections_are_concurrent():
    """Coleções decodificadas são containers concorrentes."""
    result = _decode(
        """\
data_file_directories: [/a, /b]
hinted_handoff_disabled_datacenters: [dc1, dc2, dc1]
table_properties:
  compaction: size_tiered
"""
    )

    doc = result.document
    assert isinstance(doc.data_file_directories, ConcurrentList)
    assert isinstance(doc.hinted_handoff_disabled_datacenters, ConcurrentSet)
    assert isinstance(doc.table_properties, ConcurrentDict)
    assert isinstance(doc.seed_provider.parameters, ConcurrentDict)
    assert doc.hinted_handoff_disabled_datacenters == {"dc1", "dc2"}


def test_default_collections_are_concurrent():
    doc = decode(b"", NodeConfig).document
    assert isinstance(doc.data_file_directories, ConcurrentList)
    assert isinstance(doc.hinted_handoff_disabled_datacenters, ConcurrentSet)
    assert isinstance(doc.table_properties, ConcurrentDict)


def test_default_collections_are_not_shared_between_documents():
    """Cada decode produz defaults de coleção próprios."""
    first = decode(b"", NodeConfig).document
    second = decode(b"", NodeConfig).document
    first.data_file_directories.append("/only/first")
    assert second.data_file_directories == []


def test_numbers_are_widened_to_float():
    """Inteiros são aceitos em settings float e convertidos."""
    result = _decode("phi_convict_threshold: 12\n")
    assert result.document.phi_convict_threshold == 12.0
    assert isinstance(result.document.phi_convict_threshold, float)


def test_enum_by_value_or_name():
    """Enums aceitam o nome do membro ou o valor em minúsculas."""
    assert _decode("disk_access_mode: MMAP_INDEX_ONLY\n").document.disk_access_mode is DiskAccessMode.MMAP_INDEX_ONLY
    assert _decode("disk_access_mode: standard\n").document.disk_access_mode is DiskAccessMode.STANDARD


@pytest.mark.parametrize(
    "text, path",
    [
        ("num_tokens: abc\n", "num_tokens"),
        ("num_tokens: true\n", "num_tokens"),
        ("auto_snapshot: 1\n", "auto_snapshot"),
        ("disk_access_mode: turbo\n", "disk_access_mode"),
        ("data_file_directories: /single\n", "data_file_directories"),
        ("seed_provider: simple\n", "seed_provider"),
        ("cluster_name: [a, b]\n", "cluster_name"),
    ],
)
def test_unconvertible_values_raise_syntax_error(text, path):
    """Valores inconvertíveis falham imediatamente, citando o caminho do setting."""
    with pytest.raises(ConfigSyntaxError) as exc:
        _decode(text)

    assert exc.value.source == "test.yaml"
    assert path in exc.value.problem


def test_malformed_yaml_raises_syntax_error():
    with pytest.raises(ConfigSyntaxError) as exc:
        _decode("cluster_name: [unclosed\n")

    message = str(exc.value)
    assert message.startswith("Invalid yaml: test.yaml")
    assert exc.value.problem


def test_non_mapping_root_raises_syntax_error():
    """A raiz do documento precisa ser um mapeamento."""
    with pytest.raises(ConfigSyntaxError):
        _decode("- just\n- a\n- list\n")


def test_report_check_lists_every_finding():
    """`check` lista todas as chaves e desativa o stack trace."""
    report = ValidationReport(
        unknown_keys={"b_unknown", "a_unknown"},
        nullified_required_keys={"cluster_name"},
    )

    with pytest.raises(InvalidConfigurationError) as exc:
        report.check("node.yaml")

    message = str(exc.value)
    for key in ("a_unknown", "b_unknown", "cluster_name"):
        assert key in message
    assert exc.value.unknown_keys == ["a_unknown", "b_unknown"]
    assert exc.value.log_stack_trace is False


def test_empty_report_check_passes():
    ValidationReport().check("node.yaml")
