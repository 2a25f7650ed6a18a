"""Launch the OptiRide API with its web UI.

The JSON API is served at the root (``/api/compare``, ``/api/reverse``,
``/api/visits``) and the Gradio interface under ``ui_path``.

    python apps/app.py
"""

from __future__ import annotations

import gradio as gr
import uvicorn

from optiride.api import create_app
from optiride.config import get_config
from optiride.container import get_container
from optiride.logging_config import configure_logging
from optiride.ports.rendering import MapRendererPort
from optiride.services import ComparisonService
from optiride.ui import build_interface

config = get_config()
configure_logging(config.observability)

container = get_container()
demo = build_interface(
    container.resolve(ComparisonService),
    container.resolve(MapRendererPort),
)
app = gr.mount_gradio_app(create_app(container), demo, path=config.api.ui_path)


if __name__ == "__main__":
    uvicorn.run(app, host=config.api.host, port=config.api.port)
