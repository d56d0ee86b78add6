"""Bootstrap (composition root) for GIGFLOW.

Assembles the application at runtime: wires concrete adapters to the
service-layer handlers, composes the message bus and unit of work and reads
configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `gigflow.adapters`, `gigflow.service_layer`,
  `gigflow.interfaces`, `gigflow.domain`, and `gigflow.config`.
- Inner layers must not import `gigflow.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_message_bus, build_write_uow

__all__ = ["AppContainer", "bootstrap", "build_message_bus", "build_write_uow"]
