"""Gradio front-end for the comparison service.

The interface is mounted on the FastAPI application by ``apps/app.py``
and calls the ComparisonService in-process.
"""

from __future__ import annotations

import html
import logging
from typing import Optional, Tuple

import gradio as gr

from .domain.errors import ComparisonError, RenderingError
from .domain.models import ComparisonRequest, ComparisonResult, FareQuote, SortOrder
from .ports.rendering import MapRendererPort
from .services.comparison import ComparisonService

logger = logging.getLogger(__name__)

SORT_CHOICES = [("Lowest price", "price"), ("Fastest ETA", "eta")]

_EMPTY_RESULTS = (
    '<p style="text-align:center;color:#9ca3af">'
    "Enter your trip to see available options.</p>"
)


def eta_badge_color(eta_minutes: int) -> str:
    if eta_minutes <= 10:
        return "#10b981"
    if eta_minutes <= 30:
        return "#f59e0b"
    return "#f43f5e"


def _price_delta(quote: FareQuote, baseline: Optional[float]) -> str:
    if baseline is None or baseline <= 0:
        return ""
    delta = quote.estimate_usd - baseline
    sign = "-" if delta <= 0 else "+"
    color = "#10b981" if delta <= 0 else "#f43f5e"
    return f'<div style="font-size:10px;color:{color}">{sign}{abs(delta):.2f}</div>'


def render_ride_card(quote: FareQuote, baseline: Optional[float] = None) -> str:
    """HTML card for one provider: ETA badge, price, app and web links."""
    provider = html.escape(quote.provider)
    return (
        '<div class="ride-card" style="display:flex;justify-content:space-between;'
        "align-items:center;padding:8px 12px;margin:6px 0;border-radius:8px;"
        'border:1px solid #262626;background:#171717;color:#e5e5e5">'
        f"<div><strong>{provider}</strong><br>"
        f'<span style="font-size:11px;color:{eta_badge_color(quote.eta_minutes)}">'
        f"ETA {quote.eta_minutes} min</span></div>"
        f"<div><strong>${quote.estimate_usd:.2f}</strong>"
        f"{_price_delta(quote, baseline)}</div>"
        "<div>"
        f'<a href="{html.escape(quote.deep_link)}" aria-label="Open {provider} app">'
        "Open App</a> · "
        f'<a href="{html.escape(quote.web_link)}" target="_blank" rel="noreferrer" '
        f'aria-label="Open {provider} web">Open Web</a>'
        "</div></div>"
    )


def render_ride_cards(result: ComparisonResult) -> str:
    """Cards for every quote in ranked order, priced against the top card."""
    if not result.results:
        return _EMPTY_RESULTS
    baseline = result.results[0].estimate_usd
    header = (
        f"<p>{html.escape(result.origin.label)} → "
        f"{html.escape(result.destination.label)} · {result.distance_km:.1f} km</p>"
    )
    return header + "".join(render_ride_card(q, baseline) for q in result.results)


def map_iframe_from_html(document_html: str, *, height_px: int = 420) -> str:
    escaped = html.escape(document_html, quote=True)
    return (
        f'<iframe srcdoc="{escaped}" '
        f'style="width: 100%; height: {height_px}px; border: 0;" '
        f'loading="lazy"></iframe>'
    )


def compare_trip(
    service: ComparisonService,
    renderer: Optional[MapRendererPort],
    pickup: str,
    dropoff: str,
    sort_by: str = "price",
) -> Tuple[str, str, str]:
    """Run a comparison for the form and return (cards, map, error)."""
    request = ComparisonRequest(
        pickup_text=pickup,
        dropoff_text=dropoff,
        sort_order=SortOrder(sort_by),
    )
    try:
        result = service.compare(request)
    except ComparisonError as e:
        return _EMPTY_RESULTS, "", e.message

    map_html = ""
    if renderer is not None:
        try:
            map_html = map_iframe_from_html(
                renderer.render_html(result.origin, result.destination)
            )
        except RenderingError as e:
            # The quotes are still valid without a map
            logger.warning("Trip map unavailable", extra={"error": str(e)})

    return render_ride_cards(result), map_html, ""


def build_interface(
    service: ComparisonService, renderer: Optional[MapRendererPort] = None
) -> gr.Blocks:
    """Assemble the Gradio Blocks app."""

    def on_compare(pickup: str, dropoff: str, sort_by: str) -> Tuple[str, str, str]:
        return compare_trip(service, renderer, pickup, dropoff, sort_by)

    def on_clear() -> Tuple[str, str, str, str, str]:
        return "", "", _EMPTY_RESULTS, "", ""

    with gr.Blocks(title="OptiRide") as demo:
        gr.Markdown(
            """
# OptiRide
Smarter fare comparisons across Uber, Lyft and more
"""
        )

        with gr.Row():
            pickup = gr.Textbox(label="Pickup location", placeholder="Address or lat, lon")
            dropoff = gr.Textbox(label="Dropoff location", placeholder="Address or lat, lon")

        sort_by = gr.Radio(SORT_CHOICES, value="price", label="Sort by")

        with gr.Row():
            btn = gr.Button("See prices", variant="primary")
            btn_clear = gr.Button("Clear")

        error = gr.Markdown()
        with gr.Row():
            cards = gr.HTML(value=_EMPTY_RESULTS)
            map_view = gr.HTML(value="<p></p>")

        btn.click(
            on_compare,
            inputs=[pickup, dropoff, sort_by],
            outputs=[cards, map_view, error],
        )
        btn_clear.click(on_clear, outputs=[pickup, dropoff, cards, map_view, error])

    return demo
