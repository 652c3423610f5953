"""Pytest fixtures for symscope tests.

The ``workspace`` fixture models a small multi-module project:

- module ``app`` (depends on ``core``) with sources and resources
- module ``core`` with its own sources
- ``widgets.jar``: a compiled copy of ``com.acme.Widget`` on ``app``'s classpath
- ``gadgets.jar`` plus ``gadgets-sources.jar``: compiled ``com.acme.Gadget``
  with attached sources
"""

import logging
import os

import pytest

from symscope.foundation.config import reset_config
from symscope.index.memory import MemoryWorkspace
from symscope.lookup.elements import (
    ClassElement,
    FieldElement,
    MethodElement,
    SourceFile,
    TextRange,
)
from symscope.lookup.protocols import LookupProject

APP_SRC = "file:///ws/app/src"
APP_RES = "file:///ws/app/resources"
CORE_SRC = "file:///ws/core/src"
WIDGETS_JAR = "jar:///libs/widgets.jar!/"
GADGETS_JAR = "jar:///libs/gadgets.jar!/"
GADGETS_SOURCES_JAR = "jar:///libs/gadgets-sources.jar!/"

WIDGET_SOURCE = """package com.acme;

public class Widget {
    private int size;

    public void render(int scale) {
        if (scale > 0) {
            draw(scale);
        }
    }

    public void render(int scale, String label) {
        draw(scale);
    }
}
"""

WIDGET_COMPILED = """package com.acme;

public class Widget {
    private int size;
    public void render(int scale) { /* compiled code */ }
    public void render(int scale, java.lang.String label) { /* compiled code */ }
}
"""

GADGET_COMPILED = """package com.acme;

public final class Gadget {
    public Gadget() { /* compiled code */ }
}
"""

GADGET_SOURCE = """package com.acme;

/** Attached source of Gadget. */
public final class Gadget {
    public Gadget() {
    }
}
"""

HELPER_SOURCE = """package com.acme.core;

public class Helper {
    public static int twice(int x) {
        return x * 2;
    }
}
"""

APP_PROPERTIES = "greeting=hello\nname=widget\n"


def span(text: str, fragment: str) -> TextRange:
    """Range of the first occurrence of ``fragment`` in ``text``."""
    start = text.index(fragment)
    return TextRange(start, start + len(fragment))


def class_extent(text: str, header: str) -> TextRange:
    """From ``header`` to the last closing brace of the file."""
    return TextRange(text.index(header), text.rindex("}") + 1)


WIDGET_RENDER_INT = """public void render(int scale) {
        if (scale > 0) {
            draw(scale);
        }
    }"""

WIDGET_RENDER_INT_STRING = """public void render(int scale, String label) {
        draw(scale);
    }"""


def _widget_class(file: SourceFile, text: str, compiled: bool) -> ClassElement:
    owner = "com.acme.Widget"
    if compiled:
        render_int = MethodElement(
            "render", owner, ("int",), file,
            span(text, "public void render(int scale) { /* compiled code */ }"), compiled=True,
        )
        render_int_string = MethodElement(
            "render", owner, ("int", "java.lang.String"), file,
            span(text, "public void render(int scale, java.lang.String label) { /* compiled code */ }"),
            compiled=True,
        )
    else:
        render_int = MethodElement("render", owner, ("int",), file, span(text, WIDGET_RENDER_INT))
        render_int_string = MethodElement(
            "render", owner, ("int", "String"), file, span(text, WIDGET_RENDER_INT_STRING)
        )
    size = FieldElement("size", owner, file, span(text, "private int size;"), compiled=compiled)
    return ClassElement(
        qualified_name=owner,
        file=file,
        range=class_extent(text, "public class Widget"),
        compiled=compiled,
        methods=(render_int, render_int_string),
        fields=(size,),
    )


def build_workspace() -> MemoryWorkspace:
    ws = MemoryWorkspace("demo", base_path="/ws")
    ws.add_module("core")
    ws.add_module("app", depends_on=["core"])

    ws.add_root(APP_SRC, "app/src", module="app")
    ws.add_root(APP_RES, "app/resources", module="app")
    ws.add_root(CORE_SRC, "core/src", module="core")
    ws.add_root(WIDGETS_JAR, "widgets.jar")
    ws.add_root(GADGETS_JAR, "gadgets.jar")
    ws.add_root(GADGETS_SOURCES_JAR, "gadgets-sources.jar")

    widget_src = ws.add_file(APP_SRC, "com/acme/Widget.java", WIDGET_SOURCE)
    widget_cls = ws.add_file(WIDGETS_JAR, "com/acme/Widget.class", WIDGET_COMPILED, compiled=True)
    gadget_cls = ws.add_file(GADGETS_JAR, "com/acme/Gadget.class", GADGET_COMPILED, compiled=True)
    gadget_src = ws.add_file(GADGETS_SOURCES_JAR, "com/acme/Gadget.java", GADGET_SOURCE)
    helper_src = ws.add_file(CORE_SRC, "com/acme/core/Helper.java", HELPER_SOURCE, live=True)

    ws.add_file(APP_RES, "app.properties", APP_PROPERTIES)
    ws.add_file(APP_RES, "config/application.yml", "server:\n  port: 8080\n")
    ws.add_file(APP_RES, "logo.png", "\x89PNG")
    ws.add_file(APP_RES, "NOTICE", "Copyright Acme\n")
    ws.add_file(WIDGETS_JAR, "app.properties", "greeting=from-jar\n")

    ws.attach_library("app", WIDGETS_JAR)
    ws.attach_library("app", GADGETS_JAR)
    ws.attach_library("app", GADGETS_SOURCES_JAR)

    ws.add_class(_widget_class(widget_src, WIDGET_SOURCE, compiled=False))
    ws.add_class(_widget_class(widget_cls, WIDGET_COMPILED, compiled=True))

    gadget_mirror = ClassElement(
        qualified_name="com.acme.Gadget",
        file=gadget_src,
        range=class_extent(GADGET_SOURCE, "/** Attached"),
    )
    ws.add_class(
        ClassElement(
            qualified_name="com.acme.Gadget",
            file=gadget_cls,
            range=class_extent(GADGET_COMPILED, "public final class Gadget"),
            compiled=True,
            source_mirror=gadget_mirror,
        )
    )

    twice = MethodElement(
        "twice", "com.acme.core.Helper", ("int",), helper_src,
        span(HELPER_SOURCE, "public static int twice(int x) {\n        return x * 2;\n    }"),
    )
    ws.add_class(
        ClassElement(
            qualified_name="com.acme.core.Helper",
            file=helper_src,
            range=class_extent(HELPER_SOURCE, "public class Helper"),
            methods=(twice,),
        )
    )
    return ws


@pytest.fixture
def workspace() -> MemoryWorkspace:
    """The demo workspace described in the module docstring."""
    return build_workspace()


@pytest.fixture
def project(workspace: MemoryWorkspace) -> LookupProject:
    """Lookup view of the demo workspace."""
    return workspace.project()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and SYMSCOPE_* variables out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in list(os.environ):
        if key.startswith("SYMSCOPE_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI entry points reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
