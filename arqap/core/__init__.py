# arqap/core/__init__.py

"""
Core building blocks shared by every domain of the application.

- `config.py`: application settings loaded from the environment (Pydantic Settings).
- `database.py`: async engine, session factory and FastAPI session dependency.
- `crud_base.py`: generic async CRUD class the domain CRUD classes extend.
- `exceptions.py`: domain errors mapped to HTTP responses in `main.py`.
- `dependencies.py`: FastAPI dependencies shared by the routers.
- `tasks.py`: arq jobs that are not tied to a single domain.
"""

__title__ = "ARQAP Core"
__description__ = "Core components for the ARQAP FastAPI application."
__version__ = "0.1.0"
__all__ = []
