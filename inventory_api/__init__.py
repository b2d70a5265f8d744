"""
inventory-api Application Package

Directory Structure:
├── routers/           # FastAPI route handlers
├── schemas/           # Pydantic models for API requests/responses
│   └── api_schemas.py # HTTP request/response structures
├── application/       # Services: models, purchases, users, dashboard, authorization
├── domain/            # Errors, entities, events and query specifications
├── db/                # MongoDB store handle and collection repositories
├── infrastructure/    # Firebase ID token verification
└── config.py          # Application configuration

Model records live in the ``models`` collection; users and the purchase
ledger live in ``users`` and ``purchases``. Callers are identified only by
the email inside a verified Firebase ID token.
"""
