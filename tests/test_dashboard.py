from __future__ import annotations

import pytest
from dash import Dash, no_update
from dash.exceptions import PreventUpdate

from lca_insight.dashboard import (
    BUSY_MESSAGE,
    ActionOutcome,
    apply_inventory_action,
    build_material_figure,
    build_stage_figure,
    create_dash_app,
    format_total,
    parse_args,
    render_inventory,
    render_outputs,
)
from lca_insight.models import AnalysisStatus
from lca_insight.orchestrator import AnalysisInProgressError


def test_empty_snapshot_renders_placeholders(orchestrator):
    snapshot = orchestrator.snapshot()

    assert format_total(snapshot).startswith("Add LCI data")
    assert len(build_stage_figure(snapshot).data) == 0
    assert len(build_material_figure(snapshot).data) == 0
    assert render_inventory(snapshot)[0].children == "No data entries added yet."


def test_figures_follow_aggregates(orchestrator, fake_openai, make_payload, steel_draft, glass_draft):
    fake_openai.responses.output_text = make_payload(
        [
            {"material": "Steel", "stage": "Manufacturing & Processing", "co2eq": 5.0},
            {"material": "Steel", "stage": "Manufacturing & Processing", "co2eq": 3.0},
            {"material": "Glass", "stage": "Raw Material Acquisition", "co2eq": 2.0},
        ]
    )
    orchestrator.add(steel_draft)
    orchestrator.add(glass_draft)
    snapshot = orchestrator.snapshot()
    assert snapshot.status == AnalysisStatus.READY

    bar = build_stage_figure(snapshot)
    pie = build_material_figure(snapshot)

    assert list(bar.data[0].x) == ["Raw Material Acquisition", "Manufacturing & Processing"]
    assert list(bar.data[0].y) == [2.0, 8.0]
    assert list(pie.data[0].labels) == ["Steel", "Glass"]
    assert format_total(snapshot) == "10.00 kg CO2eq"
    assert len(render_inventory(snapshot)) == 2


def test_create_dash_app(orchestrator):
    app = create_dash_app(orchestrator)

    assert isinstance(app, Dash)
    assert app.title == "LCA Insight"


def test_parse_args_defaults():
    args = parse_args([])

    assert args.host == "127.0.0.1"
    assert args.port == 8050
    assert args.debug is False


def test_invalid_submission_reports_each_field(orchestrator, fake_openai):
    outcome = apply_inventory_action(
        orchestrator, "submit-btn", 1, "  ", "-5", "", "Raw Material Acquisition"
    )

    assert outcome.field_errors == {
        "material": "Material name is required.",
        "quantity": "Quantity must be a positive number.",
        "unit": "Unit is required.",
    }
    assert outcome.feedback == ""
    assert outcome.reset_inputs is False
    assert len(orchestrator.store) == 0
    assert fake_openai.responses.calls == []

    rendered = render_outputs(orchestrator.snapshot(), outcome)
    assert rendered[6:9] == (
        "Material name is required.",
        "Quantity must be a positive number.",
        "Unit is required.",
    )
    assert rendered[10] is no_update
    assert rendered[11] is no_update


def test_invalid_stage_is_reported_as_feedback(orchestrator):
    outcome = apply_inventory_action(orchestrator, "submit-btn", 1, "Steel", "10", "kg", "Orbit")

    assert outcome.feedback == "Stage must be one of the life cycle stages."
    assert len(orchestrator.store) == 0


def test_successful_add_resets_inputs(orchestrator, fake_openai):
    outcome = apply_inventory_action(
        orchestrator, "submit-btn", 1, "Steel", "10", "kg", "Manufacturing & Processing"
    )

    assert outcome == ActionOutcome(reset_inputs=True)
    assert len(fake_openai.responses.calls) == 1

    rendered = render_outputs(orchestrator.snapshot(), outcome)
    assert rendered[6:10] == ("", "", "", "")
    assert rendered[10] == ""
    assert rendered[11] == ""
    assert len(rendered[0]) == 1


def test_delete_button_render_does_not_remove(orchestrator, steel_draft):
    entry = orchestrator.add(steel_draft)

    with pytest.raises(PreventUpdate):
        apply_inventory_action(
            orchestrator, {"type": "delete-entry", "index": entry.id}, 0, None, None, None, None
        )

    assert orchestrator.snapshot().entries == [entry]


def test_delete_click_removes_entry(orchestrator, steel_draft, glass_draft):
    steel = orchestrator.add(steel_draft)
    glass = orchestrator.add(glass_draft)

    apply_inventory_action(
        orchestrator, {"type": "delete-entry", "index": steel.id}, 1, None, None, None, None
    )

    assert orchestrator.snapshot().entries == [glass]


def test_clear_empties_inventory(orchestrator, steel_draft):
    orchestrator.add(steel_draft)

    apply_inventory_action(orchestrator, "clear-btn", 1, None, None, None, None)

    snapshot = orchestrator.snapshot()
    assert snapshot.entries == []
    assert snapshot.status == AnalysisStatus.IDLE


def test_busy_orchestrator_surfaces_feedback(orchestrator, monkeypatch):
    def busy(*_args, **_kwargs):
        raise AnalysisInProgressError("an analysis is already in progress")

    monkeypatch.setattr(orchestrator, "add", busy)

    outcome = apply_inventory_action(
        orchestrator, "submit-btn", 1, "Steel", "10", "kg", "Manufacturing & Processing"
    )

    assert outcome.feedback == BUSY_MESSAGE
    assert outcome.reset_inputs is False
    assert render_outputs(orchestrator.snapshot(), outcome)[9] == BUSY_MESSAGE


def test_buttons_are_disabled_while_callback_runs(orchestrator):
    app = create_dash_app(orchestrator)

    specs = [spec for spec in app._callback_list if "inventory-list.children" in spec["output"]]
    assert len(specs) == 1
    running = str(specs[0].get("running"))
    assert "submit-btn.disabled" in running
    assert "clear-btn.disabled" in running
