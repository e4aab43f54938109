from __future__ import annotations

from pathlib import Path

import pytest

from webstarter.config import build_project_config, bundled_starters_root
from webstarter.errors import TemplateSyntaxError
from webstarter.templates.engine import RenderContext, compile_template, render


def make_context(name: str = "demo", **kwargs) -> RenderContext:
    return RenderContext(project=build_project_config(name, **kwargs))


SASS_SWITCH = '<% if (project.options.includes("sass")) { %>A<% } else { %>B<% } %>'


def test_interpolates_project_name() -> None:
    assert render("<%= project.name %>", make_context("demo")) == "demo"


def test_condition_picks_else_branch_without_option() -> None:
    assert render(SASS_SWITCH, make_context(options=[])) == "B"


def test_condition_picks_if_branch_with_option() -> None:
    assert render(SASS_SWITCH, make_context(options=["sass"])) == "A"


def test_false_condition_without_else_emits_nothing() -> None:
    text = "a<% if (project.options.includes('typescript')) { %>ts<% } %>b"
    assert render(text, make_context()) == "ab"


def test_negated_membership() -> None:
    text = '<% if (!project.options.includes("sass")) { %>plain css<% } %>'
    assert render(text, make_context()) == "plain css"
    assert render(text, make_context(options=["sass"])) == ""


def test_boolean_field_condition() -> None:
    text = "<% if (project.gitInit) { %>git<% } else { %>none<% } %>"
    assert render(text, make_context(git_init=True)) == "git"
    assert render(text, make_context(git_init=False)) == "none"


def test_else_if_chain() -> None:
    text = (
        '<% if (project.options.includes("typescript")) { %>ts'
        '<% } else if (project.options.includes("sass")) { %>sass'
        "<% } else { %>none<% } %>"
    )
    assert render(text, make_context(options=["typescript", "sass"])) == "ts"
    assert render(text, make_context(options=["sass"])) == "sass"
    assert render(text, make_context()) == "none"


def test_close_and_open_in_one_tag() -> None:
    text = (
        '<% if (project.options.includes("eslint-standard")) { %>eslint,<% }\n'
        '    if (project.options.includes("typescript")) {\n'
        "%>ts,<% } %>css"
    )
    assert render(text, make_context(options=["eslint-standard", "typescript"])) == (
        "eslint,ts,css"
    )
    assert render(text, make_context(options=["typescript"])) == "ts,css"
    assert render(text, make_context()) == "css"


def test_nested_blocks() -> None:
    text = (
        "<% if (project.gitInit) { %>["
        '<% if (project.options.includes("jquery")) { %><%= project.name %><% } %>'
        "]<% } %>"
    )
    assert render(text, make_context(options=["jquery"])) == "[demo]"
    assert render(text, make_context()) == "[]"
    assert render(text, make_context(git_init=False, options=["jquery"])) == ""


def test_camel_case_fields_resolve() -> None:
    ctx = make_context(entry_point="main.js", options=["php-dirs"], wanted_dirs=["app", "lib"])
    assert render("<%= project.entryPoint %>", ctx) == "main.js"
    assert render("<%= project.wantedDirs %>", ctx) == "app,lib"


def test_value_formatting() -> None:
    ctx = make_context(options=["jquery", "sass"], git_init=True)
    assert render("<%= project.options %>", ctx) == "sass,jquery"
    assert render("<%= project.gitInit %>", ctx) == "true"
    assert render("<%= 'x' %><%= \"y\" %><%= false %>", ctx) == "xyfalse"


def test_missing_fields_render_empty() -> None:
    ctx = make_context(description="")
    assert render("[<%= project.description %>]", ctx) == "[]"
    assert render("[<%= project.homepage %>]", ctx) == "[]"


def test_undefined_root_is_a_syntax_error() -> None:
    with pytest.raises(TemplateSyntaxError, match="undefined path"):
        render("<%= other.name %>", make_context())


def test_unterminated_directive_reports_line() -> None:
    with pytest.raises(TemplateSyntaxError, match="unterminated directive") as exc:
        render("first line\n<%= project.name", make_context())
    assert exc.value.line == 2
    assert exc.value.snippet.startswith("<%=")


def test_unclosed_if_block() -> None:
    with pytest.raises(TemplateSyntaxError, match="unterminated if block") as exc:
        compile_template("a\nb\n<% if (project.gitInit) { %>x")
    assert exc.value.line == 3


def test_stray_close_and_else() -> None:
    with pytest.raises(TemplateSyntaxError, match="unmatched"):
        compile_template("x<% } %>")
    with pytest.raises(TemplateSyntaxError, match="unexpected 'else'"):
        compile_template("<% } else { %>")
    with pytest.raises(TemplateSyntaxError, match="unexpected 'else'"):
        compile_template("<% if (project.gitInit) { %>a<% } else { %>b<% } else { %>c<% } %>")


def test_arbitrary_code_is_rejected() -> None:
    with pytest.raises(TemplateSyntaxError, match="unsupported directive"):
        compile_template("<% import('fs') %>")
    with pytest.raises(TemplateSyntaxError, match="unsupported expression"):
        compile_template("<%= project.name + 1 %>")


def test_plain_text_is_unchanged_and_rendering_is_idempotent() -> None:
    ctx = make_context(options=["sass"])
    text = "body {\n  margin: 0; /* 100% */\n}\n"
    assert render(text, ctx) == text
    once = render("<%= project.name %>: " + SASS_SWITCH + "\n", ctx)
    assert render(once, ctx) == once


def test_compiled_template_is_reusable() -> None:
    template = compile_template(SASS_SWITCH)
    assert template.render(make_context(options=["sass"])) == "A"
    assert template.render(make_context()) == "B"


@pytest.mark.parametrize(
    "options",
    [
        [],
        ["sass"],
        ["typescript", "eslint-standard"],
        ["sass", "typescript", "eslint-standard", "bootstrap-cdn-js"],
    ],
)
def test_bundled_webpack_config_renders_cleanly(options: list[str]) -> None:
    source = bundled_starters_root() / "webpack-starter-project" / "webpack.config.js"
    out = render(source.read_text(encoding="utf-8"), make_context(options=options))
    assert "<%" not in out and "%>" not in out
    if "sass" in options:
        assert "'./assets/scss/app.scss'" in out
        assert "sass-loader" in out
    else:
        assert "'./assets/css/app.css'" in out
        assert "sass-loader" not in out
    assert ("ts-loader" in out) == ("typescript" in options)
    assert ("eslint-loader" in out) == ("eslint-standard" in options)


def test_syntax_error_message_includes_location() -> None:
    with pytest.raises(TemplateSyntaxError) as exc:
        render("<% nope %>", make_context())
    err = exc.value
    err.path = Path("starter/file.txt")
    assert str(err).startswith("starter/file.txt:1: unsupported directive")
