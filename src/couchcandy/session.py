"""
Connection parameters for one CouchDB endpoint.
"""

import os
from typing import Optional

from pydantic import BaseModel

DEFAULT_PORT = 5984


class Session(BaseModel):
    host: str = "http://127.0.0.1"
    port: int = DEFAULT_PORT
    database: str = ""
    username: str = ""
    password: str = ""

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Session":
        """Build a session from dbhost, dbport, dbname, dbusername and dbpassword."""
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("dbhost", "http://127.0.0.1"),
            port=int(env.get("dbport", DEFAULT_PORT)),
            database=env.get("dbname", ""),
            username=env.get("dbusername", ""),
            password=env.get("dbpassword", ""),
        )
