"""New entity form: local validation and insert payload."""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import PERSON_FISICA, PERSON_TYPES, TABLE_ENTITIES
from config.logging_config import get_logger
from src.controllers.base import ERROR, SUCCESS, Notifier
from src.errors import BackendError, FormValidationError
from src.utils.formatting import only_digits

logger = get_logger("entity_form")


def _trimmed_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class EntityFormData:
    """Values typed into the new entity form."""

    nome: str = ""
    tipo_pessoa: str = PERSON_FISICA
    documento: str = ""
    email: str = ""
    telefone: str = ""
    ativo: bool = True
    observacoes: str = ""


class EntityForm(Notifier):
    """
    State of the "Nova Entidade" page.

    Usage:
        form = EntityForm(backend)
        form.data.nome = "ACME LTDA"
        created = form.submit()
    """

    title = "Nova Entidade"
    description = "Cadastre uma nova pessoa física ou jurídica no sistema"
    submit_label = "Criar Entidade"

    def __init__(self, backend: Any, data: Optional[EntityFormData] = None):
        super().__init__()
        self.backend = backend
        self.data = data or EntityFormData()
        self.errors: Dict[str, str] = {}
        self.is_submitting = False

    @property
    def name_label(self) -> str:
        return "Nome Completo" if self.data.tipo_pessoa == PERSON_FISICA else "Nome da Empresa"

    @property
    def name_placeholder(self) -> str:
        if self.data.tipo_pessoa == PERSON_FISICA:
            return "Digite o nome completo"
        return "Digite o nome da empresa"

    def validate(self) -> Dict[str, str]:
        """Check required fields; returns field -> message."""
        errors = {}
        if not self.data.nome.strip():
            errors["nome"] = "Nome é obrigatório"
        if self.data.tipo_pessoa not in PERSON_TYPES:
            errors["tipo_pessoa"] = "Tipo de pessoa inválido"
        self.errors = errors
        return errors

    def payload(self) -> Dict[str, Any]:
        """
        Row to insert into ``entidades``.

        Raises:
            FormValidationError: If a required field is missing
        """
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)

        observacoes = self.data.observacoes.strip()
        return {
            "nome": self.data.nome.strip(),
            "tipo_pessoa": self.data.tipo_pessoa,
            "documento": only_digits(self.data.documento) or None,
            "email": _trimmed_or_none(self.data.email),
            "telefone": _trimmed_or_none(self.data.telefone),
            "ativo": bool(self.data.ativo),
            "metadados": {"observacoes": observacoes} if observacoes else None,
        }

    def submit(self) -> Optional[Dict[str, Any]]:
        """
        Validate and insert the entity.

        Returns:
            The stored row, or None when validation or the insert failed.
        """
        try:
            payload = self.payload()
        except FormValidationError:
            return None

        self.is_submitting = True
        try:
            created = self.backend.insert(TABLE_ENTITIES, payload)
        except BackendError as e:
            logger.error(f"Failed to create entity: {e}")
            self.notify(ERROR, "Erro ao salvar", str(e))
            return None
        finally:
            self.is_submitting = False

        logger.info(f"Created entity {created.get('id')}")
        self.notify(SUCCESS, "Sucesso", "Entidade criada com sucesso")
        self.data = EntityFormData()
        return created
