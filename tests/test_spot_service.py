# tests/test_spot_service.py
import pytest
from unittest.mock import AsyncMock

from spotfinder.errors import QueryExecutionError, SerializationError, StoreUnavailable
from spotfinder.geo.bounding_box import calculate_bounding_box
from spotfinder.models import AreaQuery, ShapeMode, Spot
from .test_utils import print_test_name, print_test_result


CIRCLE = AreaQuery(latitude=48.8566, longitude=2.3522, radius=500.0, shape=ShapeMode.CIRCLE)
SQUARE = AreaQuery(latitude=48.8566, longitude=2.3522, radius=500.0, shape=ShapeMode.SQUARE)


@pytest.mark.asyncio
class TestSpotService:
    """Tests pour l'orchestration requête -> Spot -> classement."""

    async def test_circle_rows_are_ranked(self, spot_service, mock_db_connector, spot_row):
        test_name = "test_circle_rows_are_ranked"
        print_test_name(test_name)
        try:
            # --- Arrange ---
            mock_db_connector.execute_query.return_value = [
                spot_row(1, 320.0, 4.0),
                spot_row(2, 15.0, 2.0),
                spot_row(3, 40.0, 4.5),
            ]

            # --- Act ---
            spots = await spot_service.find_spots_in_area(CIRCLE)

            # --- Assert ---
            assert [s.id for s in spots] == ["3", "2", "1"]
            assert all(isinstance(s, Spot) for s in spots)
            sql, *args = mock_db_connector.execute_query.call_args.args
            assert "ST_DWithin" in sql
            assert args == [2.3522, 48.8566, 500.0]
            print_test_result(test_name, passed=True)
        except Exception as e:
            print_test_result(test_name, passed=False)
            raise e

    async def test_square_uses_bounding_box(self, spot_service, mock_db_connector):
        await spot_service.find_spots_in_area(SQUARE)

        sql, *args = mock_db_connector.execute_query.call_args.args
        assert "ST_MakeEnvelope" in sql
        assert args[2:] == list(calculate_bounding_box(2.3522, 48.8566, 500.0))

    async def test_empty_result(self, spot_service):
        assert await spot_service.find_spots_in_area(CIRCLE) == []

    async def test_null_optional_fields_are_empty_strings(self, spot_service, mock_db_connector, spot_row):
        mock_db_connector.execute_query.return_value = [spot_row(1, 10.0, 3.0)]
        spot = (await spot_service.find_spots_in_area(CIRCLE))[0]
        assert spot.website == ""
        assert spot.description == ""

    async def test_unexpected_row_shape(self, spot_service, mock_db_connector, spot_row):
        bad = spot_row(1, 10.0, 3.0)
        del bad["distance"]
        mock_db_connector.execute_query.return_value = [bad]

        with pytest.raises(SerializationError):
            await spot_service.find_spots_in_area(CIRCLE)

    async def test_null_rating_is_rejected(self, spot_service, mock_db_connector, spot_row):
        mock_db_connector.execute_query.return_value = [spot_row(1, 10.0, None)]

        with pytest.raises(SerializationError):
            await spot_service.find_spots_in_area(CIRCLE)

    async def test_store_errors_propagate(self, spot_service, mock_db_connector):
        mock_db_connector.execute_query = AsyncMock(side_effect=StoreUnavailable("down"))
        with pytest.raises(StoreUnavailable):
            await spot_service.find_spots_in_area(CIRCLE)

        mock_db_connector.execute_query = AsyncMock(side_effect=QueryExecutionError("boom"))
        with pytest.raises(QueryExecutionError):
            await spot_service.find_spots_in_area(SQUARE)

    async def test_uses_configured_table(self, mock_db_connector, test_settings):
        from spotfinder.spots.spot_service import SpotService

        config = test_settings.model_copy(update={"SPOTS_TABLE": "geo.points"})
        await SpotService(mock_db_connector, config).find_spots_in_area(CIRCLE)

        sql = mock_db_connector.execute_query.call_args.args[0]
        assert 'FROM "geo"."points"' in sql
