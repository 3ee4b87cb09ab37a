"""
请求模型校验测试
"""
import pytest
from pydantic import ValidationError

from library_catalog.models.schemas import (
    BookCreateRequest,
    BookUpdateRequest,
    coerce_in_stock,
    describe_validation_error,
)
from tests.fixtures.sample_data import build_book_payload


class TestBookCreateRequest:
    """创建请求测试"""

    def test_coerces_numeric_strings(self):
        """price/pages 可以是字符串"""
        request = BookCreateRequest.model_validate(build_book_payload(price="12.50", pages="300"))
        assert request.price == 12.5
        assert request.pages == 300

    def test_defaults(self):
        """language 默认 English，inStock 默认 true，rating 缺省"""
        record = BookCreateRequest.model_validate(build_book_payload()).to_record()
        assert record["language"] == "English"
        assert record["in_stock"] is True
        assert record["rating"] is None
        assert record["cover_image"] is None
        assert record["published_date"] == "2020-01-15"

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        ("true", True),
        ("TRUE", True),
        (False, False),
        ("false", False),
        ("yes", False),
        (1, False),
        (None, False),
    ])
    def test_in_stock_coercion(self, value, expected):
        request = BookCreateRequest.model_validate(build_book_payload(inStock=value))
        assert request.in_stock is expected
        assert coerce_in_stock(value) is expected

    def test_missing_required_field(self):
        payload = build_book_payload()
        del payload["isbn"]
        with pytest.raises(ValidationError) as exc_info:
            BookCreateRequest.model_validate(payload)
        assert "isbn" in describe_validation_error(exc_info.value)

    @pytest.mark.parametrize("overrides", [
        {"title": "   "},
        {"price": -1},
        {"pages": 0},
        {"rating": 5.5},
        {"publishedDate": "not-a-date"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            BookCreateRequest.model_validate(build_book_payload(**overrides))

    def test_strips_text_and_ignores_unknown_fields(self):
        request = BookCreateRequest.model_validate(
            build_book_payload(title="  Dune  ", id="999", createdAt="2020-01-01")
        )
        record = request.to_record()
        assert record["title"] == "Dune"
        assert "id" not in record
        assert "created_at" not in record

    def test_explicit_zero_rating_is_kept(self):
        request = BookCreateRequest.model_validate(build_book_payload(rating=0))
        assert request.rating == 0


class TestBookUpdateRequest:
    """更新请求测试"""

    def test_only_supplied_fields_change(self):
        changes = BookUpdateRequest.model_validate({"title": "New"}).changes()
        assert changes == {"title": "New"}

    def test_falsy_values_are_updates(self):
        """price=0 和 inStock=false 不能被当成未提供"""
        changes = BookUpdateRequest.model_validate({"price": 0, "inStock": False}).changes()
        assert changes == {"price": 0, "in_stock": False}

    def test_string_in_stock(self):
        changes = BookUpdateRequest.model_validate({"inStock": "true"}).changes()
        assert changes == {"in_stock": True}

    def test_published_date_serialised(self):
        changes = BookUpdateRequest.model_validate({"publishedDate": "1999-12-31"}).changes()
        assert changes == {"published_date": "1999-12-31"}

    def test_null_required_field_rejected(self):
        with pytest.raises(ValidationError):
            BookUpdateRequest.model_validate({"title": None})

    def test_null_cover_clears_it(self):
        changes = BookUpdateRequest.model_validate({"coverImage": None}).changes()
        assert changes == {"cover_image": None}

    def test_empty_body_changes_nothing(self):
        assert BookUpdateRequest.model_validate({}).changes() == {}
