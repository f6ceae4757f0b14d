import logging
from typing import Any, Dict, List

from ..config import Settings
from ..query import Statement

log = logging.getLogger("couchbase")


def _cb_connect(settings: Settings):
    from couchbase.auth import PasswordAuthenticator
    from couchbase.cluster import Cluster
    from couchbase.options import ClusterOptions

    auth = PasswordAuthenticator(settings.username, settings.password)
    return Cluster(settings.connection_string, ClusterOptions(auth))


def _execute_statement_with_cluster(settings: Settings, statement: Statement) -> List[Dict[str, Any]]:
    """
    Open a cluster connection, run one statement with its named parameters,
    close. Errors from the SDK propagate untouched.
    """
    from couchbase.options import QueryOptions

    cluster = _cb_connect(settings)
    try:
        log.debug("Running %s statement: %s", statement.kind, statement.sql)
        result = cluster.query(
            statement.sql,
            QueryOptions(named_parameters=dict(statement.params)),
        )
        return [dict(row) for row in result.rows()]
    finally:
        cluster.close()


class CouchbaseRunner:
    """Execution collaborator backed by a Couchbase cluster."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def run(self, statement: Statement) -> List[Dict[str, Any]]:
        return _execute_statement_with_cluster(self.settings, statement)
