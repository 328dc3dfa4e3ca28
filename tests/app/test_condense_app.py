from __future__ import annotations

import json
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import pytest

from condenser.app import build_cache, condense
from condenser.config import CachingConfig, ConfigCheckError
from condenser.domain.errors import PipelineError
from tests.helpers.wikidata import item_payload, property_payload, write_dump

if TYPE_CHECKING:
    from pathlib import Path

    from tests.helpers.workspace import Workspace


def _read_json(path: Path) -> list[dict[str, Any]]:
    return json.loads(path.read_text(encoding="utf-8"))


def _write_bcorp(workspace: Workspace, *websites: str) -> None:
    rows = "".join(f"{index},Company {index},{site}\n" for index, site in enumerate(websites))
    (workspace.origin_dir / "bcorp.csv").write_text(
        f"company_id,company_name,website\n{rows}", encoding="utf-8"
    )


@pytest.mark.parametrize("organisation_first", [True, False])
def test_condense_propagates_certifications_to_products(
    workspace: Workspace, organisation_first: bool
) -> None:
    organisation = item_payload("Q1", label="Acme", websites=["https://www.example.com"])
    product = item_payload(
        "Q2", label="Rocket", description="phone", manufacturers=["Q1"], instance_of=["Q19723451"]
    )
    other = item_payload("Q3", label="Nothing special")
    payloads = [organisation, product] if organisation_first else [product, organisation]
    write_dump(workspace.dump_path, [*payloads, other, property_payload("P176")])
    _write_bcorp(workspace, "example.com")

    result = condense(workspace.config())

    assert result.entities == 4
    products = _read_json(workspace.target_dir / "products.json")
    organisations = _read_json(workspace.target_dir / "organisations.json")
    assert [entry["id"] for entry in products] == ["Q2"]
    assert products[0]["category"] == "smartphone"
    assert products[0]["manufacturer_ids"] == ["Q1"]
    assert products[0]["certifications"] == {"bcorp": True, "tco": False, "fti": None}
    assert [entry["id"] for entry in organisations] == ["Q1"]
    assert organisations[0]["certifications"] == {"bcorp": True, "tco": False, "fti": None}


def test_condense_output_does_not_depend_on_worker_count(workspace: Workspace) -> None:
    payloads = [
        item_payload(f"Q{index}", label=f"Maker {index}", websites=[f"https://m{index}.example"])
        for index in range(1, 30)
    ] + [
        item_payload(f"Q{index}", label=f"Phone {index}", manufacturers=[f"Q{index - 100}"])
        for index in range(101, 130)
    ]
    write_dump(workspace.dump_path, payloads)
    (workspace.origin_dir / "tco.yaml").write_text(
        "- company_name: Maker 7\n  wikidata_id: Q7\n", encoding="utf-8"
    )

    outputs: list[tuple[str, str]] = []
    for workers in (1, 4):
        condense(workspace.config(workers=workers))
        outputs.append(
            (
                (workspace.target_dir / "products.json").read_text(encoding="utf-8"),
                (workspace.target_dir / "organisations.json").read_text(encoding="utf-8"),
            )
        )

    assert outputs[0] == outputs[1]
    products = _read_json(workspace.target_dir / "products.json")
    assert [entry["id"] for entry in products if entry["certifications"]["tco"]] == ["Q107"]


def test_condense_uses_cache_for_manufacturers_without_website(workspace: Workspace) -> None:
    write_dump(
        workspace.dump_path,
        [
            item_payload("Q1", label="Acme"),
            item_payload("Q2", label="Rocket", manufacturers=["Q1"]),
        ],
    )
    (workspace.cache_dir / "wikidata.json").write_text(
        '{"manufacturer_ids": ["Q1"], "classes": []}', encoding="utf-8"
    )

    condense(workspace.config())

    organisations = _read_json(workspace.target_dir / "organisations.json")
    assert [entry["id"] for entry in organisations] == ["Q1"]


def test_condense_checks_paths_before_reading(workspace: Workspace) -> None:
    with pytest.raises(ConfigCheckError):
        condense(workspace.config())

    assert not (workspace.target_dir / "products.json").exists()


def test_condense_reports_malformed_dump_without_output(workspace: Workspace) -> None:
    dump_path = workspace.target_dir.parent / "broken.json"
    dump_path.write_text('[\n{"type": "item", "id": "Q1"},\n{oops},\n]\n', encoding="utf-8")
    config = replace(workspace.config(), wikidata_dump_path=dump_path)

    with pytest.raises(PipelineError) as excinfo:
        condense(config)

    assert excinfo.value.stage == "reading"
    assert "line 3" in str(excinfo.value)
    assert list(workspace.target_dir.iterdir()) == []


def test_build_cache_writes_manufacturers_and_classes(workspace: Workspace) -> None:
    write_dump(
        workspace.dump_path,
        [
            item_payload("Q2", label="Rocket", manufacturers=["Q1"], instance_of=["Q19723451"]),
            item_payload("Q3", subclass_of=["Q5"]),
        ],
    )
    config = CachingConfig(
        wikidata_dump_path=workspace.dump_path,
        wikidata_cache_path=workspace.cache_dir / "wikidata.json",
        workers=2,
    )

    result = build_cache(config)

    assert result.entities == 2
    cache = json.loads((workspace.cache_dir / "wikidata.json").read_text(encoding="utf-8"))
    assert cache == {"manufacturer_ids": ["Q1"], "classes": ["Q19723451", "Q5"]}


def test_condense_tolerates_unparsable_website(workspace: Workspace) -> None:
    write_dump(
        workspace.dump_path,
        [
            item_payload("Q1", label="Acme", websites=["http://[acme.example]/"]),
            item_payload("Q2", label="Rocket", manufacturers=["Q1"]),
        ],
    )

    result = condense(workspace.config())

    assert len(result.collector.organisations) == 1
    products = _read_json(workspace.target_dir / "products.json")
    assert [entry["id"] for entry in products] == ["Q2"]
    assert products[0]["certifications"]["bcorp"] is False
