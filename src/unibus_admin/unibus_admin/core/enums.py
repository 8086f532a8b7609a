from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Perfil do usuário logado; define a área do painel que ele acessa."""

    ADMIN = "admin"
    DRIVER = "motorista"
    STUDENT = "aluno"


class BusStatus(str, Enum):
    ACTIVE = "Ativo"
    MAINTENANCE = "Manutenção"
    INACTIVE = "Inativo"


class StudentShift(str, Enum):
    MORNING = "Manha"
    AFTERNOON = "Tarde"
    NIGHT = "Noite"
    FULL_TIME = "Integral"


class RouteStatus(str, Enum):
    PLANNED = "Planejada"
    IN_PROGRESS = "EmAndamento"
    COMPLETED = "Concluida"
    CANCELLED = "Cancelada"


class RouteDirection(str, Enum):
    """Sentido da viagem (o backend chama o campo de ``Destination``)."""

    OUTBOUND = "Ida"
    RETURN = "Volta"
    CIRCULAR = "Circular"


class PaymentStatus(str, Enum):
    """Situação da mensalidade.

    O backend às vezes devolve o id numérico do status em vez do nome.
    """

    PENDING = "Pendente"
    PAID = "Pago"
    OVERDUE = "Atrasado"

    @classmethod
    def from_api(cls, value) -> "PaymentStatus":
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            by_id = {1: cls.PENDING, 2: cls.PAID, 3: cls.OVERDUE}
            if value in by_id:
                return by_id[value]
        return cls(str(value))


class PaymentMethod(str, Enum):
    PIX = "PIX"
    CARD = "Cartão"
    CASH = "Dinheiro"
    TRANSFER = "Transferência"


class AttendanceStatus(str, Enum):
    PRESENT = "Presente"
    ABSENT = "Ausente"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    URGENT = "urgent"


class EmergencyType(str, Enum):
    ACCIDENT = "Acidente"
    BREAKDOWN = "Pane"
    MEDICAL = "Problema Médico"
    OTHER = "Outros"


class EmergencyStatus(str, Enum):
    OPEN = "Aberta"
    IN_SERVICE = "Em Atendimento"
    RESOLVED = "Resolvida"
    CANCELLED = "Cancelada"
