"""Accessors for the issue-shaped records the dashboard searches.

Records follow the GitHub REST issue shape (``user.login``,
``assignees[].login``, ``labels[].name``, ``created_at``). Labels given as
plain strings are accepted too.
"""

from __future__ import annotations

from typing import Any

from sieve.core.accessor import get_field, is_missing, is_null


def _text(value: Any) -> str:
    if is_null(value):
        return ""
    return str(value)


def label_names(record: Any) -> list[str]:
    labels = get_field(record, "labels")
    if not isinstance(labels, (list, tuple)):
        return []
    names: list[str] = []
    for label in labels:
        if isinstance(label, str):
            names.append(label)
        else:
            name = get_field(label, "name")
            if isinstance(name, str):
                names.append(name)
    return names


def author_login(record: Any) -> str:
    login = get_field(record, "user.login")
    if is_null(login):
        # gh CLI output names the author field 'author'
        login = get_field(record, "author.login")
    return _text(login)


def assignee_logins(record: Any) -> list[str]:
    assignees = get_field(record, "assignees")
    if not isinstance(assignees, (list, tuple)):
        return []
    logins = []
    for a in assignees:
        login = a if isinstance(a, str) else get_field(a, "login")
        if isinstance(login, str) and login:
            logins.append(login)
    return logins


def title(record: Any) -> str:
    return _text(get_field(record, "title"))


def body(record: Any) -> str:
    return _text(get_field(record, "body"))


def state(record: Any) -> str:
    return _text(get_field(record, "state"))


def record_number(record: Any) -> Any:
    """The record's ordinal identifier: ``number``, falling back to ``id``."""
    number = get_field(record, "number")
    if is_null(number):
        number = get_field(record, "id")
    return None if is_missing(number) else number
