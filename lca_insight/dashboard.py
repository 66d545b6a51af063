from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from dash import ALL, Dash, Input, Output, State, ctx, dcc, html, no_update
from dash.exceptions import PreventUpdate

from lca_insight.analysis import AnalysisClient, MissingCredentialError
from lca_insight.models import STAGE_ORDER, AnalysisSnapshot, LCIEntry
from lca_insight.orchestrator import AnalysisInProgressError, AnalysisOrchestrator
from lca_insight.utils.form import (
    COMMON_MATERIALS,
    DEFAULT_STAGE,
    DEFAULT_UNIT,
    EntryValidationError,
    validate_entry_form,
)

logger = logging.getLogger(__name__)

FORM_FIELDS = ("material", "quantity", "unit")
BUSY_MESSAGE = "An analysis is already running; please wait for it to finish."


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lca_dashboard",
        description="Interactive Life Cycle Assessment dashboard with AI impact estimates.",
    )
    parser.add_argument(
        "--host", default="127.0.0.1", help="Dashboard host (default 127.0.0.1)"
    )
    parser.add_argument(
        "--port", type=int, default=8050, help="Dashboard port (default 8050)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run Dash in debug mode (enables hot reload; not for production).",
    )
    return parser.parse_args(argv)


def stage_dataframe(snapshot: AnalysisSnapshot) -> pd.DataFrame:
    rows = [row.model_dump() for row in snapshot.by_stage]
    if not rows:
        return pd.DataFrame(columns=["stage", "co2eq"])
    return pd.DataFrame(rows)


def material_dataframe(snapshot: AnalysisSnapshot) -> pd.DataFrame:
    rows = [row.model_dump() for row in snapshot.by_material]
    if not rows:
        return pd.DataFrame(columns=["material", "co2eq"])
    return pd.DataFrame(rows)


def build_stage_figure(snapshot: AnalysisSnapshot) -> go.Figure:
    df = stage_dataframe(snapshot)
    if df.empty:
        return go.Figure(layout={"title": {"text": "Impact by Life Cycle Stage"}})
    return px.bar(
        df,
        x="stage",
        y="co2eq",
        title="Impact by Life Cycle Stage",
        labels={"stage": "", "co2eq": "kg CO2eq"},
        category_orders={"stage": STAGE_ORDER},
    )


def build_material_figure(snapshot: AnalysisSnapshot) -> go.Figure:
    df = material_dataframe(snapshot)
    if df.empty:
        return go.Figure(layout={"title": {"text": "Contribution by Material"}})
    return px.pie(
        df,
        names="material",
        values="co2eq",
        title="Contribution by Material",
    )


def format_total(snapshot: AnalysisSnapshot) -> str:
    if snapshot.is_loading:
        return "Analyzing..."
    if not snapshot.impacts:
        return "Add LCI data to visualize the environmental impact analysis."
    return f"{snapshot.total_co2eq:.2f} kg CO2eq"


def render_entry(entry: LCIEntry) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.Strong(entry.material),
                    html.Div(f"{entry.quantity:g} {entry.unit} - {entry.stage}"),
                ],
                className="inventory-entry-text",
            ),
            html.Button(
                "Delete",
                id={"type": "delete-entry", "index": entry.id},
                n_clicks=0,
                className="danger",
            ),
        ],
        className="inventory-entry",
    )


def render_inventory(snapshot: AnalysisSnapshot) -> List[Any]:
    if not snapshot.entries:
        return [html.P("No data entries added yet.", className="muted")]
    return [render_entry(entry) for entry in snapshot.entries]


def render_recommendations(snapshot: AnalysisSnapshot) -> Any:
    if not snapshot.recommendations:
        return html.P(
            "AI recommendations are on standby. They will appear here after data analysis.",
            className="muted",
        )
    return html.Ul([html.Li(text) for text in snapshot.recommendations])


def render_error(snapshot: AnalysisSnapshot) -> Any:
    if not snapshot.error:
        return None
    return html.Div([html.Strong("Error: "), snapshot.error], className="error-banner")


@dataclass
class ActionOutcome:
    field_errors: Dict[str, str] = field(default_factory=dict)
    feedback: str = ""
    reset_inputs: bool = False


def apply_inventory_action(
    orchestrator: AnalysisOrchestrator,
    trigger: Any,
    clicks: Optional[int],
    material: Optional[str],
    quantity: Optional[str],
    unit: Optional[str],
    stage: Optional[str],
) -> ActionOutcome:
    """Apply the form or inventory action identified by ``trigger``.

    ``trigger`` is the Dash component id that fired and ``clicks`` its
    ``n_clicks`` value. Raises ``PreventUpdate`` for delete buttons that
    fire on first render.
    """

    outcome = ActionOutcome()
    try:
        if trigger == "submit-btn":
            try:
                draft = validate_entry_form(material, quantity, unit, stage)
            except EntryValidationError as exc:
                outcome.field_errors = exc.errors
                outcome.feedback = exc.errors.get("stage", "")
            else:
                orchestrator.add(draft)
                outcome.reset_inputs = True
        elif trigger == "clear-btn":
            orchestrator.clear()
        elif isinstance(trigger, dict) and trigger.get("type") == "delete-entry":
            # Freshly rendered delete buttons fire with n_clicks == 0.
            if not clicks:
                raise PreventUpdate
            orchestrator.remove(int(trigger["index"]))
    except AnalysisInProgressError:
        logger.info("Ignoring %s while an analysis is in flight", trigger)
        outcome.feedback = BUSY_MESSAGE
    return outcome


def render_outputs(snapshot: AnalysisSnapshot, outcome: ActionOutcome) -> Tuple[Any, ...]:
    reset: Any = "" if outcome.reset_inputs else no_update
    return (
        render_inventory(snapshot),
        render_error(snapshot),
        format_total(snapshot),
        build_stage_figure(snapshot),
        build_material_figure(snapshot),
        render_recommendations(snapshot),
        *(outcome.field_errors.get(name, "") for name in FORM_FIELDS),
        outcome.feedback,
        reset,
        reset,
    )


def create_dash_app(orchestrator: AnalysisOrchestrator) -> Dash:
    app = Dash(__name__)
    app.title = "LCA Insight"

    def field_error(name: str) -> html.Div:
        return html.Div(id=f"{name}-error", className="field-error")

    form = html.Div(
        [
            html.H2("1. Add LCI Data"),
            html.Label("Material / Process", htmlFor="material-input"),
            dcc.Input(
                id="material-input",
                type="text",
                placeholder="e.g., Recycled Plastic Pellets",
                list="material-suggestions",
                autoComplete="off",
            ),
            html.Datalist(
                id="material-suggestions",
                children=[html.Option(value=name) for name in COMMON_MATERIALS],
            ),
            field_error("material"),
            html.Label("Quantity", htmlFor="quantity-input"),
            dcc.Input(id="quantity-input", type="text", placeholder="e.g., 100"),
            field_error("quantity"),
            html.Label("Unit", htmlFor="unit-input"),
            dcc.Input(id="unit-input", type="text", value=DEFAULT_UNIT),
            field_error("unit"),
            html.Label("Life Cycle Stage", htmlFor="stage-input"),
            dcc.Dropdown(
                id="stage-input",
                options=[{"label": stage, "value": stage} for stage in STAGE_ORDER],
                value=DEFAULT_STAGE,
                clearable=False,
            ),
            html.Button("Add & Analyze", id="submit-btn", n_clicks=0, className="primary"),
            html.Div(id="form-feedback", className="form-feedback"),
            html.Div(
                [
                    html.H3("Current Inventory"),
                    html.Button("Clear All", id="clear-btn", n_clicks=0, className="danger"),
                ],
                className="inventory-header",
            ),
            html.Div(id="inventory-list", children=render_inventory(orchestrator.snapshot())),
        ],
        className="input-pane",
    )

    results = html.Div(
        [
            html.Div(id="error-banner"),
            html.H2("2. Impact Visualization"),
            dcc.Loading(
                [
                    html.H3("Total Environmental Impact"),
                    html.Div(id="total-impact", className="total-impact"),
                    dcc.Graph(id="stage-bar"),
                    dcc.Graph(id="material-pie"),
                    html.H2("3. AI Recommendations"),
                    html.Div(id="recommendations"),
                ]
            ),
        ],
        className="results-pane",
    )

    app.layout = html.Div(
        [
            html.H1("AI-Powered LCA Dashboard"),
            html.Div([form, results], className="dashboard-grid"),
        ],
        className="container",
    )

    @app.callback(
        Output("inventory-list", "children"),
        Output("error-banner", "children"),
        Output("total-impact", "children"),
        Output("stage-bar", "figure"),
        Output("material-pie", "figure"),
        Output("recommendations", "children"),
        Output("material-error", "children"),
        Output("quantity-error", "children"),
        Output("unit-error", "children"),
        Output("form-feedback", "children"),
        Output("material-input", "value"),
        Output("quantity-input", "value"),
        Input("submit-btn", "n_clicks"),
        Input("clear-btn", "n_clicks"),
        Input({"type": "delete-entry", "index": ALL}, "n_clicks"),
        State("material-input", "value"),
        State("quantity-input", "value"),
        State("unit-input", "value"),
        State("stage-input", "value"),
        running=[
            (Output("submit-btn", "disabled"), True, False),
            (Output("clear-btn", "disabled"), True, False),
        ],
    )
    def handle_inventory_actions(
        _submit_clicks: int,
        _clear_clicks: int,
        _delete_clicks: List[int],
        material: Optional[str],
        quantity: Optional[str],
        unit: Optional[str],
        stage: Optional[str],
    ):
        clicks = ctx.triggered[0].get("value") if ctx.triggered else None
        outcome = apply_inventory_action(
            orchestrator, ctx.triggered_id, clicks, material, quantity, unit, stage
        )
        return render_outputs(orchestrator.snapshot(), outcome)

    return app


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        client = AnalysisClient()
    except MissingCredentialError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    app = create_dash_app(AnalysisOrchestrator(client))
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
