"""Helpers for building documents and clicks in tests."""

from __future__ import annotations

import textwrap
from typing import Dict, Iterable, List, Optional

from sourcepilot.models import ResolutionRequest, SourceDocument
from sourcepilot.rendering import context_for

SOURCE_ROOT = "https://github.com/acme/app/blob/master/app/src/main/java"
MAIN_URL = f"{SOURCE_ROOT}/com/app/main/MainActivity.kt"
RES_ROOT = "https://github.com/acme/app/blob/master/app/src/main/res"

MAIN_ACTIVITY = """
package com.app.main

import android.os.Bundle
import android.view.View
import com.app.ui.Home
import com.app.data.Repo as Store
import com.app.databinding.ActivityMainBinding

class MainActivity : AppCompatActivity() {

    private val repo = Repository()
    lateinit var binding: ActivityMainBinding

    override fun onCreate(savedInstanceState: Bundle?) {
        super.onCreate(savedInstanceState)
        setContentView(R.layout.activity_main)
        val home: Home = createHome()
        repo.load()
        refresh()
        title = getString(R.string.app_name)
        menuInflater.inflate(R.menu.main, menu)
        val store: Store = Store()
    }

    fun refresh() {
    }

    fun createHome(): Home {
        return Home()
    }
}
"""


def make_document(text: str, url: str = MAIN_URL) -> SourceDocument:
    """Dedent ``text`` and wrap it in a document hosted at ``url``."""
    return SourceDocument.from_text(textwrap.dedent(text).lstrip("\n"), url)


def click(
    document: SourceDocument,
    line_number: int,
    token: str,
    *,
    occurrence: int = 1,
    css_class: Optional[str] = None,
) -> ResolutionRequest:
    """Build the request for clicking ``token`` on ``line_number``."""
    line = document.lines[line_number - 1]
    context = context_for(
        line.text,
        token,
        occurrence=occurrence,
        line_number=line_number,
        css_class=css_class,
    )
    assert context is not None, f"{token!r} is not a token of line {line_number}: {line.text!r}"
    return ResolutionRequest.for_context(context, snapshot_id=document.snapshot_id)


class FakeRemote:
    """In-memory stand-in for the HTTP collaborator."""

    def __init__(
        self,
        *,
        texts: Optional[Dict[str, str]] = None,
        missing: Iterable[str] = (),
    ) -> None:
        self.texts = dict(texts or {})
        self.missing = set(missing)
        self.checked: List[str] = []
        self.fetched: List[str] = []

    def exists(self, url: str) -> bool:
        self.checked.append(url)
        return url.split("#", 1)[0] not in self.missing

    def fetch_text(self, url: str) -> str:
        from sourcepilot.hosts.github import FetchError

        self.fetched.append(url)
        key = url.split("#", 1)[0]
        if key not in self.texts:
            raise FetchError(f"{key} not found")
        return self.texts[key]


__all__ = [
    "FakeRemote",
    "MAIN_ACTIVITY",
    "MAIN_URL",
    "RES_ROOT",
    "SOURCE_ROOT",
    "click",
    "make_document",
]
