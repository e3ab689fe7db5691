import markdown

MD_EXTENSIONS = ["fenced_code", "codehilite", "tables", "nl2br", "toc", "sane_lists"]
MD_EXTENSION_CONFIGS = {
    "codehilite": {
        "css_class": "hljs",
        "guess_lang": False,  # unlabelled blocks stay plain text
        "use_pygments": True,
        "pygments_lang_class": True,  # adds "language-<lang>" to <code>
    },
}


def render_markdown(body: str) -> str:
    """Render a markdown body to HTML with highlighted code blocks."""
    return markdown.markdown(
        body,
        extensions=MD_EXTENSIONS,
        extension_configs=MD_EXTENSION_CONFIGS,
        output_format="html",
    )
