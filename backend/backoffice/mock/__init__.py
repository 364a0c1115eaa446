"""Mock data package for the back-office.

Serves every dashboard, statistics and site-settings endpoint from
in-memory data so the admin frontend can run without a backend.

Contents:
    fixtures.py    — Randomized record builders (Faker-backed)
    pagination.py  — Page slicing, filtering, sorting
    store.py       — Generic stateful collection (MockStore)
    enums.py       — Name-keyed enum group store
    datasets.py    — Domain stores with their business rules
    registry.py    — One object holding every store for an app instance

Called by: api/deps.py, api/routes/*
Depends on: faker, pydantic
"""
