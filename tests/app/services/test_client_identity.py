"""Testes da identidade do cidadão (existente e registrante novo)."""

from __future__ import annotations

import pytest

from app.domain.client import DocumentType, ExistingClient, NewClient, RegistrantData
from app.services.client_identity import (
    ClientIdentityResolver,
    RegistrantForm,
    is_registrant_valid,
    registrant_errors,
    validate_document_number,
    validate_email,
    validate_full_name,
    validate_mobile,
    validate_registrant_field,
)
from tests.fakes.fake_booking_api import KNOWN_CLIENT, FakeBookingApi
from utils.errors import ClientNotFoundError, LocalValidationError

VALID = RegistrantData(
    document_number="1032456789",
    full_name="Carlos Pérez",
    mobile="3001234567",
    email="carlos@example.com",
)


class TestResolveExisting:
    @pytest.mark.asyncio
    async def test_known_client_resolves(self, fake_api: FakeBookingApi) -> None:
        identity = await ClientIdentityResolver(fake_api).resolve_existing(f"  {KNOWN_CLIENT} ")

        assert isinstance(identity, ExistingClient)
        assert identity.client_number == KNOWN_CLIENT
        assert identity.record is not None
        assert fake_api.calls_to("validate_client") == [{"client_number": KNOWN_CLIENT}]

    @pytest.mark.asyncio
    async def test_blank_number_never_calls_network(self, fake_api: FakeBookingApi) -> None:
        with pytest.raises(LocalValidationError) as exc_info:
            await ClientIdentityResolver(fake_api).resolve_existing("   ")

        assert "client_number" in exc_info.value.errors
        assert fake_api.calls == []

    @pytest.mark.asyncio
    async def test_any_lookup_failure_is_not_found(self, fake_api: FakeBookingApi) -> None:
        async def _boom(client_number: str):
            raise ConnectionError("offline")

        fake_api.validate_client = _boom  # type: ignore[method-assign]

        with pytest.raises(ClientNotFoundError):
            await ClientIdentityResolver(fake_api).resolve_existing("999")


class TestFieldValidators:
    @pytest.mark.parametrize(
        ("value", "ok"),
        [
            ("1", True),
            ("123456789012345", True),
            ("1234567890123456", False),
            ("12a4", False),
            ("", False),
            ("\u0661\u0662\u0663\u0664\u0665", False),
        ],
    )
    def test_document_number(self, value: str, ok: bool) -> None:
        assert (validate_document_number(value) is None) is ok

    def test_full_name_bounds(self) -> None:
        assert validate_full_name("Al") is not None
        assert validate_full_name("Ana") is None
        assert validate_full_name("x" * 201) is not None

    def test_email_and_mobile(self) -> None:
        assert validate_email("ana@example.com") is None
        assert validate_email("ana@example") == "Email inválido"
        assert validate_mobile("300123456") == "Celular debe tener 10 dígitos"
        assert validate_mobile("3001234567") is None

    def test_only_ascii_digits_are_accepted(self) -> None:
        arabic_indic_mobile = "\u0663\u0660\u0660\u0661\u0662\u0663\u0664\u0665\u0666\u0667"

        assert validate_mobile(arabic_indic_mobile) is not None
        assert not is_registrant_valid(VALID.model_copy(update={"mobile": arabic_indic_mobile}))

    def test_optional_fields_are_not_validated(self) -> None:
        assert validate_registrant_field("phone", "12") is None
        assert validate_registrant_field("address", "") is None


class TestRegistrant:
    def test_validity_is_and_of_required_fields(self) -> None:
        assert is_registrant_valid(VALID)
        invalid = VALID.model_copy(update={"email": "nope"})
        assert registrant_errors(invalid) == {"email": "Email inválido"}

    def test_phone_never_produces_errors(self) -> None:
        form = RegistrantForm(VALID.model_copy(update={"phone": "12"}))

        assert form.blur("phone") is None
        identity = form.to_identity()

        assert isinstance(identity, NewClient)
        assert "phone" not in form.errors

    def test_errors_appear_only_after_blur(self) -> None:
        form = RegistrantForm()
        form.update(full_name="Al")
        assert form.errors == {}
        assert form.is_valid is False

        assert form.blur("full_name") == "Nombre debe tener entre 3 y 200 caracteres"
        form.update(full_name="Alicia")
        assert "full_name" not in form.errors

    def test_update_coerces_document_type_and_rejects_unknown(self) -> None:
        form = RegistrantForm()
        form.update(document_type="CE")
        assert form.data.document_type is DocumentType.CE

        with pytest.raises(LocalValidationError):
            form.update(nickname="x")

    def test_to_identity_requires_valid_fields(self) -> None:
        form = RegistrantForm(VALID.model_copy(update={"mobile": ""}))

        with pytest.raises(LocalValidationError) as exc_info:
            form.to_identity()

        assert set(exc_info.value.errors) == {"mobile"}
