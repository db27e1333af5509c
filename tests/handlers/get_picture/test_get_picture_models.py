import pytest
from pydantic import ValidationError

from core.models.picture import PictureType
from handlers.get_picture.models import GetPictureRequest


class TestGetPictureRequest:
    def test_defaults(self) -> None:
        request = GetPictureRequest(picture_id="pic_1")

        assert request.target_size == 0
        assert request.show_default is True
        assert request.default_type == PictureType.ENTITY
        assert request.metadata is False
        assert request.download is False

    def test_target_size_from_query_string(self) -> None:
        assert GetPictureRequest(picture_id="pic_1", target_size="100").target_size == 100

    @pytest.mark.parametrize("target_size", [-1, 100000])
    def test_target_size_out_of_range(self, target_size) -> None:
        with pytest.raises(ValidationError):
            GetPictureRequest(picture_id="pic_1", target_size=target_size)

    def test_target_size_follows_maximum_image_size_setting(self, monkeypatch) -> None:
        monkeypatch.setenv("MAXIMUM_IMAGE_SIZE", "2400")

        assert GetPictureRequest(picture_id="pic_1", target_size=2000).target_size == 2000

    def test_target_size_above_default_maximum(self, monkeypatch) -> None:
        monkeypatch.delenv("MAXIMUM_IMAGE_SIZE", raising=False)

        with pytest.raises(ValidationError):
            GetPictureRequest(picture_id="pic_1", target_size=2000)

    @pytest.mark.parametrize(
        "value,expected",
        [("avatar", PictureType.AVATAR), ("Entity", PictureType.ENTITY), ("10", PictureType.AVATAR)],
    )
    def test_default_type_parsing(self, value, expected) -> None:
        assert GetPictureRequest(picture_id="pic_1", default_type=value).default_type == expected

    def test_invalid_default_type(self) -> None:
        with pytest.raises(ValidationError):
            GetPictureRequest(picture_id="pic_1", default_type="banner")

    def test_store_location_must_be_absolute(self) -> None:
        with pytest.raises(ValidationError):
            GetPictureRequest(picture_id="pic_1", store_location="shop.example.com/")

    def test_empty_picture_id(self) -> None:
        with pytest.raises(ValidationError):
            GetPictureRequest(picture_id="")
