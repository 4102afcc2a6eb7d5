"""
Service type catalog.

Closed, version-controlled list of the services a job can ask for. Lookups
outside the catalog raise UnknownServiceTypeError instead of falling back.
"""

from dataclasses import dataclass
from typing import Dict, List

CATALOG_VERSION = 1

SERVICE_CATEGORIES = {
    "rural": "Servicos Rurais",
    "construction": "Construcao",
    "maintenance": "Manutencao",
    "transport": "Transporte",
}


class UnknownServiceTypeError(KeyError):
    """Raised when a service type id is not in the catalog."""

    def __init__(self, service_type_id: str):
        super().__init__(service_type_id)
        self.service_type_id = service_type_id

    def __str__(self) -> str:
        return f"Unknown service type: {self.service_type_id!r}"


@dataclass(frozen=True)
class ServiceType:
    """Catalog entry for a kind of work."""
    id: str
    name: str
    unit: str
    base_price: float
    min_level: int  # lowest worker level allowed to take the job
    category: str


SERVICE_TYPES: List[ServiceType] = [
    ServiceType("poda", "Poda", "planta", 2.0, 1, "rural"),
    ServiceType("enxertia", "Enxertia", "enxerto", 4.0, 2, "rural"),
    ServiceType("colheita", "Colheita", "kg", 0.6, 1, "rural"),
    ServiceType("rocagem", "Rocagem", "ha", 180.0, 1, "rural"),
    ServiceType("aplicacao", "Aplicacao/Manejo", "ha", 220.0, 2, "rural"),
    ServiceType("trator", "Operador de Trator", "hora", 45.0, 2, "rural"),
    ServiceType("motorista", "Motorista/Logistica", "km", 2.5, 2, "transport"),
    ServiceType("pedreiro", "Pedreiro", "diaria", 180.0, 1, "construction"),
    ServiceType("eletricista", "Eletricista", "servico", 200.0, 2, "maintenance"),
    ServiceType("encanador", "Encanador", "servico", 180.0, 2, "maintenance"),
    ServiceType("serralheiro", "Serralheiro", "servico", 220.0, 2, "construction"),
    ServiceType("pintor", "Pintor", "m2", 25.0, 1, "construction"),
    ServiceType("carpinteiro", "Carpinteiro", "diaria", 200.0, 2, "construction"),
    ServiceType("jardineiro", "Jardineiro", "diaria", 120.0, 1, "maintenance"),
    ServiceType("limpeza", "Limpeza de Terreno", "ha", 250.0, 1, "rural"),
    ServiceType("cercas", "Instalacao de Cercas", "metro", 35.0, 2, "rural"),
    ServiceType("soldador", "Soldador", "servico", 250.0, 3, "maintenance"),
]

_BY_ID: Dict[str, ServiceType] = {service.id: service for service in SERVICE_TYPES}


def get_service_type(service_type_id: str) -> ServiceType:
    """
    Resolve a service type id against the catalog.

    Raises:
        UnknownServiceTypeError: If the id is not in the catalog
    """
    try:
        return _BY_ID[service_type_id]
    except KeyError:
        raise UnknownServiceTypeError(service_type_id) from None


def is_known_service_type(service_type_id: str) -> bool:
    return service_type_id in _BY_ID
