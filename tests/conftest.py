"""Shared fixtures: in-memory database, seeded legislators and a current session."""

import datetime as dt
import os

# Pacing delays off before settings is imported
os.environ.setdefault("PARL_REQUEST_DELAY", "0")
os.environ.setdefault("PARL_BATCH_DELAY", "0")

import duckdb
import pytest

from app.container import Container
from app.models import Ballot, Vote, VoteResult
from app.repositories import SessionRepository, init_tables

SESSION_START = dt.date(2025, 5, 26)

LEGISLATORS = [
    (1, "Ziad Aboultaif", "Ziad", "Aboultaif", "Conservative", "Edmonton Manning"),
    (2, "Anju Dhillon", "Anju", "Dhillon", "Liberal", "Dorval-Lachine-LaSalle"),
    (3, "Alexandre Boulerice", "Alexandre", "Boulerice", "NDP", "Rosemont-La Petite-Patrie"),
    (4, "Marie-Claude Bibeau", "Marie-Claude", "Bibeau", "Lib.", "Compton-Stanstead"),
]


class MemoryCache:
    """Dict-backed response cache; ttl is ignored."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def put(self, key, payload, ttl):
        self.data[key] = payload


@pytest.fixture
def conn():
    conn = duckdb.connect(":memory:")
    init_tables(conn)
    yield conn
    conn.close()


@pytest.fixture
def seeded(conn):
    conn.executemany(
        "INSERT INTO legislator (id, name, first_name, last_name, party, district) VALUES (?, ?, ?, ?, ?, ?)",
        [list(row) for row in LEGISLATORS],
    )
    SessionRepository(conn).set_current(45, 1, SESSION_START)
    return conn


@pytest.fixture
def container(seeded):
    return Container(seeded)


@pytest.fixture
def memory_cache():
    return MemoryCache()


def make_vote(vote_id="/votes/45-1/10/", legislator_id=1, ballot=Ballot.YEA, **kwargs) -> Vote:
    fields = {
        "date": dt.date(2025, 6, 18),
        "result": VoteResult.AGREED_TO,
        "parliament_number": 45,
        "session_number": 1,
    }
    fields.update(kwargs)
    return Vote(vote_id=vote_id, legislator_id=legislator_id, ballot=ballot, **fields)
