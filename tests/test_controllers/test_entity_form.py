"""Tests for the new entity form."""

import pytest


@pytest.fixture
def form(demo_backend):
    from src.controllers.entity_form import EntityForm

    return EntityForm(demo_backend)


class TestEntityForm:
    """Tests for EntityForm."""

    def test_name_is_required(self, form):
        """Test a blank name fails validation."""
        from src.errors import FormValidationError

        form.data.nome = "   "

        with pytest.raises(FormValidationError) as excinfo:
            form.payload()

        assert excinfo.value.errors == {"nome": "Nome é obrigatório"}
        assert form.submit() is None

    def test_payload_normalization(self, form):
        """Test trimming, document digits and metadata."""
        form.data.nome = "  ACME LTDA "
        form.data.tipo_pessoa = "JURIDICA"
        form.data.documento = "99.888.777/0001-66"
        form.data.email = "  "
        form.data.telefone = " (11) 4000-0000 "
        form.data.observacoes = " fornecedor novo "

        assert form.payload() == {
            "nome": "ACME LTDA",
            "tipo_pessoa": "JURIDICA",
            "documento": "99888777000166",
            "email": None,
            "telefone": "(11) 4000-0000",
            "ativo": True,
            "metadados": {"observacoes": "fornecedor novo"},
        }

    def test_labels_follow_person_type(self, form):
        """Test the name label depends on the person type."""
        assert form.name_label == "Nome Completo"

        form.data.tipo_pessoa = "JURIDICA"
        assert form.name_label == "Nome da Empresa"

    def test_submit_inserts_and_resets(self, form, demo_backend):
        """Test a valid form is stored and cleared."""
        form.data.nome = "Ana Lima"

        created = form.submit()

        assert created["nome"] == "Ana Lima"
        assert created["documento"] is None
        assert created["metadados"] is None
        assert form.data.nome == ""
        assert len(demo_backend.select("entidades")) == 8
        assert form.pop_notifications()[0].level == "success"

    def test_submit_backend_error(self, form):
        """Test a duplicate document is reported and the data kept."""
        form.data.nome = "Copia"
        form.data.documento = "112.223.330/0018-1"

        assert form.submit() is None

        assert form.data.nome == "Copia"
        assert not form.is_submitting
        assert form.pop_notifications()[0].title == "Erro ao salvar"
