"""
TagBuilder example.

Demonstrates:
- Building form inputs with generated, sanitized ids
- Prepending CSS classes
- Returning rendered markup from a FastAPI endpoint
"""

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from fastapi_mvc_extensions import TagBuilder, TagRenderMode

app = FastAPI(title="TagBuilder Example")


def text_box(name: str, value: str) -> str:
    tag = TagBuilder("input")
    tag.merge_attribute("type", "text")
    tag.merge_attribute("name", name)
    tag.merge_attribute("value", value)
    tag.generate_id(name)
    tag.add_css_class("form-control")
    return tag.to_string(TagRenderMode.SELF_CLOSING)


def label(for_name: str, text: str) -> str:
    tag = TagBuilder("label")
    tag.merge_attribute("for", TagBuilder.create_sanitized_id(for_name, "_"))
    tag.set_inner_text(text)
    return str(tag)


@app.get("/form", response_class=HTMLResponse)
async def form():
    """Render a small form; user-supplied text is escaped."""
    form_tag = TagBuilder("form")
    form_tag.merge_attributes({"method": "post", "action": "/people"})
    form_tag.inner_html = (
        label("Person.Name", "Name <required>")
        + text_box("Person.Name", 'Jane "JD" Doe')
    )
    return form_tag.to_string()


if __name__ == "__main__":
    import uvicorn

    print(text_box("Person.Name", 'Jane "JD" Doe'))
    print("\nStarting server at http://localhost:8000/form")
    uvicorn.run(app, host="0.0.0.0", port=8000)
