from dataclasses import replace

import pytest

from placegeo.config import APIConfig, FilterConfig, GeometryConfig, PipelineConfig, get_config, validate_config


class TestValidateConfig:
    """Tests for configuration validation."""

    def test_defaults_valid(self):
        validate_config(get_config())
        validate_config(PipelineConfig())

    @pytest.mark.parametrize("geometry", [
        GeometryConfig(area_tolerance=-0.001),
        GeometryConfig(route_tolerance=float("nan")),
        GeometryConfig(route_tolerance=None),
        GeometryConfig(projected_x_range=[10.0, 1.0]),
        GeometryConfig(projected_crs=""),
    ])
    def test_bad_geometry(self, geometry):
        with pytest.raises(ValueError):
            validate_config(PipelineConfig(geometry=geometry))

    def test_zero_tolerance_allowed(self):
        validate_config(PipelineConfig(geometry=GeometryConfig(area_tolerance=0.0, route_tolerance=0.0)))

    def test_bad_api(self):
        with pytest.raises(ValueError):
            validate_config(PipelineConfig(api=APIConfig(overpass_urls=[])))
        with pytest.raises(ValueError):
            validate_config(PipelineConfig(api=APIConfig(id_batch_size=0)))

    def test_all_errors_reported(self):
        config = replace(
            PipelineConfig(),
            geometry=GeometryConfig(area_tolerance=-1.0),
            filters=FilterConfig(min_area={"park": -5.0}),
        )
        with pytest.raises(ValueError) as excinfo:
            validate_config(config)
        message = str(excinfo.value)
        assert "area_tolerance" in message
        assert "min_area" in message
