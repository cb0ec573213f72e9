"""
Actions: argument setter and query action.
"""
from dbcommons.action.argument_setter import ArgumentSetter
from dbcommons.action.base import DatabaseAction
from dbcommons.action.config import ArgumentSetterConfig, ConnectionConfig
from dbcommons.action.config import OracleQueryActionConfig, QueryActionConfig
from dbcommons.action.query_action import QueryAction

__all__ = [
    'DatabaseAction',
    'ArgumentSetter',
    'QueryAction',
    'ConnectionConfig',
    'ArgumentSetterConfig',
    'QueryActionConfig',
    'OracleQueryActionConfig',
]
