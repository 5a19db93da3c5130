import logging
from functools import partial

import gradio as gr

from json_distiller.config import load_config
from json_distiller.fields import editor_field_order
from json_distiller.handlers_distill import (
    export_distilled_handler,
    handle_distill_reset,
    handle_distill_upload,
    handle_samples_change,
)
from json_distiller.handlers_editor import (
    export_items_handler,
    handle_editor_focus,
    handle_field_delete,
    handle_field_update,
    handle_item_duplicate,
    handle_json_input,
    refresh_items_table,
)
from json_distiller.items import display_value
from json_distiller.log import configure_logging

logger = logging.getLogger(__name__)

config = load_config()

# --- UI Definition ---
with gr.Blocks(title="JSON Distiller") as demo:
    gr.Markdown("# JSON Distiller and Editor")

    # State
    items_state = gr.State(value=[])
    fields_state = gr.State(value=[])
    distill_document_state = gr.State()

    with gr.Tab("JSON Editor"):
        json_text = gr.Textbox(
            label="JSON Array",
            placeholder="Paste your JSON array here...",
            lines=8,
        )
        editor_error = gr.Markdown()

        @gr.render(inputs=[items_state, fields_state], triggers=[items_state.change, fields_state.change])
        def render_items(items, fields):
            if not items or not fields:
                return

            ordered = editor_field_order(fields)
            for index, item in enumerate(items):
                if not isinstance(item, dict):
                    continue
                with gr.Group():
                    with gr.Row():
                        gr.Markdown(f"### Item {index + 1}")
                        dup_btn = gr.Button("Duplicate", size="sm", scale=0)
                        dup_btn.click(fn=partial(handle_item_duplicate, index), inputs=[items_state], outputs=[items_state])

                    numeric = [f for f in ordered if f.type == "number"]
                    others = [f for f in ordered if f.type != "number"]

                    def field_row(field):
                        value = item.get(field.key)
                        with gr.Row():
                            if field.type == "number":
                                box = gr.Number(label=field.key, value=value if isinstance(value, (int, float)) else None, scale=4)
                            elif field.type == "boolean" and isinstance(value, bool):
                                box = gr.Checkbox(label=field.key, value=value, scale=4)
                            else:
                                box = gr.Textbox(
                                    label=field.key,
                                    value=display_value(value) if field.key in item else "",
                                    lines=5 if field.is_long_text else 1,
                                    rtl=field.is_long_text,
                                    scale=4,
                                )
                            delete_btn = gr.Button("✕", size="sm", variant="stop", scale=0, min_width=40)

                        event = box.input if isinstance(box, gr.Checkbox) else box.blur
                        event(fn=partial(handle_field_update, index, field), inputs=[box, items_state], outputs=[items_state])
                        delete_btn.click(fn=partial(handle_field_delete, index, field.key), inputs=[items_state], outputs=[items_state])

                    if numeric:
                        with gr.Row():
                            for field in numeric:
                                with gr.Column(min_width=160):
                                    field_row(field)
                    for field in others:
                        field_row(field)

        gr.Markdown("### Table View")
        items_table = gr.Dataframe(label="Items", interactive=False)

        with gr.Row():
            export_name = gr.Textbox(label="Output Filename (optional)", placeholder="edited")
            export_btn = gr.Button("Export JSON", variant="primary")
        export_file = gr.File(label="Download Result")
        export_status = gr.Textbox(label="Status", interactive=False)

        json_text.change(
            fn=handle_json_input,
            inputs=[json_text, items_state, fields_state],
            outputs=[items_state, fields_state, editor_error],
        )

        json_text.focus(
            fn=handle_editor_focus,
            inputs=[json_text, items_state],
            outputs=[json_text],
        )

        items_state.change(
            fn=refresh_items_table,
            inputs=[items_state, fields_state],
            outputs=[items_table],
        )

        export_btn.click(
            fn=export_items_handler,
            inputs=[items_state, export_name],
            outputs=[export_file, export_status],
        )

    with gr.Tab("JSON Distiller"):
        gr.Markdown(
            "Drop a JSON file to extract unique value variations from arrays. "
            "Useful for creating minimal JSON samples for AI agents."
        )
        with gr.Row():
            with gr.Column(scale=1):
                samples_per_category = gr.Number(
                    label="Samples per category",
                    value=1,
                    minimum=1,
                    maximum=config.max_samples,
                    precision=0,
                )
                distill_file = gr.File(label="Drag & drop a JSON file", file_types=[".json"])
                distill_error = gr.Textbox(label="Status", interactive=False)
                with gr.Row():
                    reset_btn = gr.Button("Reset")
                    download_btn = gr.Button("Download", variant="primary")
                distill_download = gr.File(label="Distilled File")

            with gr.Column(scale=2):
                distill_name = gr.Textbox(label="File (distilled)", interactive=False)
                distill_result = gr.Code(label="Distilled JSON", language="json", lines=20, interactive=True)

        distill_file.upload(
            fn=partial(handle_distill_upload, config=config),
            inputs=[distill_file, samples_per_category],
            outputs=[distill_document_state, distill_result, distill_name, distill_error],
        )

        samples_per_category.change(
            fn=partial(handle_samples_change, config=config),
            inputs=[distill_document_state, samples_per_category, distill_result],
            outputs=[distill_result, distill_error],
        )

        reset_btn.click(
            fn=handle_distill_reset,
            inputs=[],
            outputs=[distill_document_state, distill_result, distill_name, distill_error, distill_download],
        )

        download_btn.click(
            fn=export_distilled_handler,
            inputs=[distill_result, distill_name],
            outputs=[distill_download, distill_error],
        )


def main():
    configure_logging(config.log_level)
    logger.info("Starting JSON Distiller on %s:%d", config.host, config.port)
    demo.launch(server_name=config.host, server_port=config.port)


if __name__ == "__main__":
    main()
