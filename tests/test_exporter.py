import io
import json

import pytest
from ruamel.yaml import YAML

from clashview.core.models import NodeRecord
from clashview.export.exporter import NodeExporter
from clashview.parsing.pipeline import parse_clash_nodes


def load_yaml(text, typ="safe"):
    return YAML(typ=typ).load(io.StringIO(text))


def test_yaml_export_is_valid_yaml(scenario_text):
    nodes = parse_clash_nodes(scenario_text)
    output = NodeExporter().to_yaml(nodes)

    data = load_yaml(output)
    assert data["proxies"] == [n.to_dict() for n in nodes]


def test_yaml_export_uses_single_line_records(scenario_text):
    nodes = parse_clash_nodes(scenario_text)
    output = NodeExporter().to_yaml(nodes)

    lines = output.splitlines()
    assert lines[0] == "proxies:"
    record_lines = [l for l in lines[1:] if l.strip()]
    assert len(record_lines) == 2
    assert all(l.strip().startswith("- {") and l.strip().endswith("}") for l in record_lines)


def test_yaml_export_reads_back_through_the_scanner():
    nodes = parse_clash_nodes(
        'proxies:\n  - { name: "a, b", type: trojan, server: t.example, port: 443, sni: t.example, udp: true }\n'
    )
    again = parse_clash_nodes(NodeExporter().to_yaml(nodes))
    assert [n.to_dict() for n in again] == [n.to_dict() for n in nodes]


def test_required_keys_lead_the_record():
    node = NodeRecord(properties={"cipher": "auto", "port": 1, "name": "n", "udp": True,
                                  "server": "s", "type": "ss"})
    data = load_yaml(NodeExporter().to_yaml([node]), typ="rt")
    assert list(data["proxies"][0].keys()) == ["name", "type", "server", "port", "cipher", "udp"]


def test_json_export(scenario_text):
    nodes = parse_clash_nodes(scenario_text)
    data = json.loads(NodeExporter().to_json(nodes))
    assert data[1] == {"name": "B", "type": "vmess", "server": "b.example.com", "port": 8443, "tls": True}


def test_export_dispatch_and_unknown_format(scenario_text):
    nodes = parse_clash_nodes(scenario_text)
    exporter = NodeExporter()
    assert exporter.export(nodes, "JSON") == exporter.to_json(nodes)
    with pytest.raises(ValueError, match="Unsupported export format"):
        exporter.export(nodes, "toml")
