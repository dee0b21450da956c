"""Tests for store error translation."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from ozza.domain.error import StoreUnavailableError
from ozza.domain.value import FailureReason
from ozza.persistence.database import store_errors


class TestStoreErrors:
    """Tests for store_errors."""

    @pytest.mark.asyncio
    async def test_operational_error_becomes_store_unavailable(self):
        with pytest.raises(StoreUnavailableError) as exc_info:
            async with store_errors("invitations.find_by_token"):
                raise OperationalError(
                    "SELECT 1", {}, ConnectionRefusedError("connection refused")
                )

        assert exc_info.value.reason == FailureReason.STORE_UNAVAILABLE
        assert exc_info.value.operation == "invitations.find_by_token"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_timeout_becomes_store_unavailable(self):
        with pytest.raises(StoreUnavailableError):
            async with store_errors("memberships.add"):
                raise TimeoutError()

    @pytest.mark.asyncio
    async def test_integrity_error_passes_through(self):
        with pytest.raises(IntegrityError):
            async with store_errors("memberships.add"):
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self):
        with pytest.raises(ValueError):
            async with store_errors("invitations.create"):
                raise ValueError("bad input")
