"""
Dialect resolution.

Maps the driver name a connection reports (a SQLAlchemy dialect name, a
SQLAlchemy ``dialect+driver`` string, or a DB-API module name) to the dialect
tag used for identifier quoting.
"""

POSTGRES_FAMILY = frozenset({"pgsql", "postgres", "postgresql"})

# DB-API module names that do not match their dialect tag
DRIVER_DIALECTS = {
    "psycopg2": "postgresql",
    "psycopg": "postgresql",
    "pg8000": "postgresql",
    "sqlite3": "sqlite",
    "pysqlite2": "sqlite",
    "pymysql": "mysql",
    "mysqldb": "mysql",
    "mysql.connector": "mysql",
    "mariadb": "mysql",
}


def resolve_dialect(driver_name: str) -> str:
    """
    Resolve a reported driver name to a dialect tag.

    Args:
        driver_name: Name reported by the connection

    Returns:
        Lower-case dialect tag; unknown names pass through unchanged

    Examples:
        >>> resolve_dialect("postgresql+psycopg2")
        'postgresql'
        >>> resolve_dialect("sqlite3")
        'sqlite'
        >>> resolve_dialect("pgsql")
        'pgsql'
    """
    name = (driver_name or "").strip().lower()
    name = name.split("+", 1)[0]
    return DRIVER_DIALECTS.get(name, name)


def is_postgres_family(dialect: str) -> bool:
    """Return True if the dialect quotes identifiers with double quotes."""
    return resolve_dialect(dialect) in POSTGRES_FAMILY
