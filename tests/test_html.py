from skillpath.logic.suggestions import clean_guide
from skillpath.utils.html import html_to_text, sanitize_html, strip_code_fences


def test_strip_code_fences():
    assert strip_code_fences("```html\n<h1>Hi</h1>\n```") == "<h1>Hi</h1>"
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_script_removed_with_content():
    html = "<section><h2>Plan</h2><script>alert('x')</script></section>"

    assert sanitize_html(html) == "<section><h2>Plan</h2></section>"


def test_disallowed_tags_unwrapped_keeping_text():
    html = '<p>Read <a href="https://evil">this</a> <b>now</b></p>'

    assert sanitize_html(html) == "<p>Read this now</p>"


def test_class_only_kept_where_allowed():
    html = (
        '<div class="skills" onclick="x()"><span class="badge" style="color:red">Python</span></div>'
        '<p class="intro">Hi</p>'
    )

    assert sanitize_html(html) == '<div class="skills"><span class="badge">Python</span></div><p>Hi</p>'


def test_clean_guide_handles_fenced_model_output():
    raw = "```html\n<h1>Personalized Roadmap</h1><img src=x onerror=alert(1)><ul><li>Step</li></ul>\n```"

    assert clean_guide(raw) == "<h1>Personalized Roadmap</h1><ul><li>Step</li></ul>"


def test_html_to_text():
    assert html_to_text("<p>Hello <strong>world</strong></p>") == "Hello world"
