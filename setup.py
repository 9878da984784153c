from setuptools import setup, find_packages

setup(
    name="sme-assessment",
    version="0.1.0",
    packages=find_packages(exclude=["tests*", "scripts*", "alembic*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "alembic",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<5",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
        "email-validator",
        "reportlab",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
