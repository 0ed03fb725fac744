"""Stylesheets injected into exported documents and diagrams."""

MATHJAX_MARKER = 'jax="CHTML"'

_LIGHT_VARIABLES = {
    "--background-primary": "#ffffff",
    "--background-secondary": "#f2f3f5",
    "--background-modifier-border": "#dddddd",
    "--text-normal": "#2e3338",
    "--text-muted": "#888888",
    "--text-faint": "#999999",
    "--text-accent": "#705dcf",
    "--interactive-accent": "#7b6cd9",
    "--code-background": "#f5f6f8",
    "--font-text": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Inter, sans-serif",
    "--font-monospace": "Menlo, SFMono-Regular, Consolas, 'Roboto Mono', monospace",
}

_DARK_VARIABLES = {
    **_LIGHT_VARIABLES,
    "--background-primary": "#202020",
    "--background-secondary": "#161616",
    "--background-modifier-border": "#333333",
    "--text-normal": "#dcddde",
    "--text-muted": "#999999",
    "--text-faint": "#666666",
    "--text-accent": "#7f6df2",
    "--interactive-accent": "#483699",
    "--code-background": "#2a2a2a",
}

_BASE_CSS = """
body {
    background-color: var(--background-primary);
    color: var(--text-normal);
    font-family: var(--font-text);
    line-height: 1.5;
}
a, .internal-link {
    color: var(--text-accent);
}
code, pre {
    font-family: var(--font-monospace);
    background-color: var(--code-background);
}
pre {
    padding: 0.5em 1em;
    border-radius: 4px;
}
blockquote {
    border-left: 2px solid var(--interactive-accent);
    margin-left: 0;
    padding-left: 1em;
    color: var(--text-muted);
}
table {
    border-collapse: collapse;
}
th, td {
    border: 1px solid var(--background-modifier-border);
    padding: 4px 8px;
}
img {
    max-width: 100%;
}
.internal-embed {
    display: block;
    border-left: 1px solid var(--interactive-accent);
    padding-left: 1em;
}
"""

MATHJAX_FONT_CSS = """
mjx-container[jax="CHTML"] {
    line-height: 0;
}
mjx-container[jax="CHTML"][display="true"] {
    display: block;
    text-align: center;
    margin: 1em 0;
}
mjx-container [space="1"] { margin-left: .111em; }
mjx-container [space="2"] { margin-left: .167em; }
mjx-container [space="3"] { margin-left: .222em; }
mjx-container [space="4"] { margin-left: .278em; }
mjx-container [space="5"] { margin-left: .333em; }
mjx-c::before {
    display: block;
    width: 0;
}
.MJX-TEX {
    font-family: MJXZERO, MJXTEX;
}
@font-face {
    font-family: MJXZERO;
    src: url("https://cdn.jsdelivr.net/npm/mathjax@3/es5/output/chtml/fonts/woff-v2/MathJax_Zero.woff") format("woff");
}
@font-face {
    font-family: MJXTEX;
    src: url("https://cdn.jsdelivr.net/npm/mathjax@3/es5/output/chtml/fonts/woff-v2/MathJax_Main-Regular.woff") format("woff");
}
@font-face {
    font-family: MJXTEX-I;
    src: url("https://cdn.jsdelivr.net/npm/mathjax@3/es5/output/chtml/fonts/woff-v2/MathJax_Math-Italic.woff") format("woff");
}
"""


def theme_variables(light: bool) -> str:
    """CSS custom properties of the light or dark theme."""
    variables = _LIGHT_VARIABLES if light else _DARK_VARIABLES
    declarations = "\n".join(f"    {name}: {value};" for name, value in variables.items())
    return f":root {{\n{declarations}\n}}\n"


def app_css(light: bool) -> str:
    """Theme variables plus the document rules that use them."""
    return theme_variables(light) + _BASE_CSS
