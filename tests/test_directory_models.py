"""
Directory Model Tests

Validation of business / opportunity payloads and the allow-listed
update field sets.
"""

from typing import get_args

import pytest
from pydantic import ValidationError

from app.directory.models import (
    Business,
    BusinessCreate,
    BusinessUpdate,
    Opportunity,
    OpportunityCreate,
    OpportunityUpdate,
    Pagination,
)
from app.shared.errors import InvalidArgument
from app.shared.vocabulary import OPPORTUNITY_STATUSES, OPPORTUNITY_TYPES


class TestBusinessCreate:

    def test_valid_payload(self):
        payload = BusinessCreate(
            company_name="  Acme Agro  ",
            country="Brazil",
            business_type="Agriculture",
            countries_of_interest=["India", "China", "India"],
            tags=["soy", " Soy ", "", "coffee"],
        )
        assert payload.company_name == "Acme Agro"
        assert payload.countries_of_interest == ["India", "China"]
        assert payload.tags == ["soy", "coffee"]

    def test_rejects_non_brics_interest(self):
        with pytest.raises(ValidationError) as exc:
            BusinessCreate(
                company_name="Acme",
                country="Brazil",
                business_type="Agriculture",
                countries_of_interest=["India", "France"],
            )
        assert "France" in str(exc.value)

    def test_rejects_unknown_business_type(self):
        with pytest.raises(ValidationError):
            BusinessCreate(company_name="Acme", country="Brazil", business_type="Space Piracy")

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            BusinessCreate(
                company_name="Acme",
                country="Brazil",
                business_type="Energy",
                is_verified=True,
            )

    def test_rejects_blank_required_text(self):
        with pytest.raises(ValidationError):
            BusinessCreate(company_name="   ", country="Brazil", business_type="Energy")


class TestBusinessUpdate:

    def test_only_set_fields_are_returned(self):
        update = BusinessUpdate(description="New", countries_of_interest=["Egypt"])
        assert update.to_update_fields() == {
            "description": "New",
            "countries_of_interest": ["Egypt"],
        }

    def test_fields_follow_allow_list_order(self):
        update = BusinessUpdate(tags=["x"], company_name="Acme")
        assert list(update.to_update_fields()) == ["company_name", "tags"]

    def test_explicit_null_on_nullable_field(self):
        update = BusinessUpdate(description=None)
        assert update.to_update_fields() == {"description": None}

    def test_explicit_null_on_required_field(self):
        update = BusinessUpdate(company_name=None)
        with pytest.raises(InvalidArgument):
            update.to_update_fields()

    def test_empty_update_rejected(self):
        with pytest.raises(InvalidArgument):
            BusinessUpdate().to_update_fields()

    def test_unknown_column_rejected(self):
        """Arbitrary keys never reach the SET clause."""
        with pytest.raises(ValidationError):
            BusinessUpdate(**{"user_id": 99})
        with pytest.raises(ValidationError):
            BusinessUpdate(**{"id = 1; --": "x"})

    def test_allow_list_is_not_a_field(self):
        assert "UPDATABLE_FIELDS" not in BusinessUpdate.model_fields


class TestOpportunityPayloads:

    def test_valid_create(self):
        payload = OpportunityCreate(
            title="Soybean export",
            type="offer",
            category="Agriculture",
            country="Brazil",
        )
        assert payload.type == "offer"
        assert payload.tags == []

    @pytest.mark.parametrize("value", ["sale", "OFFER", ""])
    def test_rejects_unknown_type(self, value):
        with pytest.raises(ValidationError):
            OpportunityCreate(title="t", type=value, category="Energy", country="Brazil")

    def test_rejects_unknown_category(self):
        with pytest.raises(ValidationError):
            OpportunityCreate(title="t", type="demand", category="Weapons", country="Brazil")

    def test_update_status(self):
        update = OpportunityUpdate(status="closed")
        assert update.to_update_fields() == {"status": "closed"}

    def test_update_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            OpportunityUpdate(status="archived")

    def test_update_rejects_views(self):
        """The view counter is not owner-editable."""
        with pytest.raises(ValidationError):
            OpportunityUpdate(views=1000)


class TestStoredRecords:

    def test_null_arrays_become_empty(self):
        business = Business(
            id=1,
            company_name="Acme",
            country="Brazil",
            business_type="Energy",
            countries_of_interest=None,
            tags=None,
        )
        assert business.countries_of_interest == []
        assert business.tags == []

        opportunity = Opportunity(
            id=1, title="t", type="offer", category="Energy", country="Brazil", tags=None,
        )
        assert opportunity.tags == []
        assert opportunity.status == "active"
        assert opportunity.views == 0


class TestPagination:

    @pytest.mark.parametrize("total,limit,pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)])
    def test_total_pages(self, total, limit, pages):
        assert Pagination.build(1, limit, total).total_pages == pages


class TestVocabularyAlignment:

    def test_opportunity_literals_match_vocabulary(self):
        assert get_args(Opportunity.model_fields["type"].annotation) == OPPORTUNITY_TYPES
        assert get_args(Opportunity.model_fields["status"].annotation) == OPPORTUNITY_STATUSES
