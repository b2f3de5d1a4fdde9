"""
Navigation for the turbo shell: path rules, routing and capability gating.
"""

from .capability_gate import CapabilityGate, probe_authentication
from .path_configuration import PathConfiguration, PathConfigurationError, PathConfigurationSource
from .path_rules import PathRule, VisitAction, VisitProperties, resolve
from .shell_settings import ShellSettings
from .visit_router import RouteDecision, VisitRequest, VisitTarget, route

__all__ = [
    'CapabilityGate',
    'probe_authentication',
    'PathConfiguration',
    'PathConfigurationError',
    'PathConfigurationSource',
    'PathRule',
    'VisitAction',
    'VisitProperties',
    'resolve',
    'ShellSettings',
    'RouteDecision',
    'VisitRequest',
    'VisitTarget',
    'route',
]
