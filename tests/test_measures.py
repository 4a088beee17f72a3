"""Tests for measures module."""
import pytest

from shade_planner.contracts import Post, ShadeRectangle
from shade_planner.measures import (
    cantilever_span,
    consecutive_spans,
    coverage_area,
    nearest_cover_point,
    pairwise_distances_ft,
    post_overhangs,
)
from shade_planner.units import PlanScale


class TestPlanScale:

    def test_round_trip_constants(self, scale):
        assert scale.to_feet(100.0) == pytest.approx(10.0)
        assert scale.to_plan(10.0) == pytest.approx(100.0)
        assert scale.units_per_foot == pytest.approx(10.0)

    @pytest.mark.parametrize("bad", [0.0, -0.1])
    def test_non_positive_scale_rejected(self, bad):
        with pytest.raises(ValueError, match="positive"):
            PlanScale(feet_per_unit=bad)


class TestCantileverSpan:

    def test_needs_two_posts(self, scale, square_shade):
        assert cantilever_span([Post(500.0, 500.0)], square_shade, scale) == 0.0

    def test_needs_shade(self, scale):
        posts = [Post(0.0, 0.0), Post(500.0, 0.0)]
        assert cantilever_span(posts, None, scale) == 0.0

    def test_posts_inside_contribute_nothing(self, scale, square_shade):
        posts = [Post(10.0, 10.0), Post(90.0, 50.0), Post(100.0, 100.0)]
        assert cantilever_span(posts, square_shade, scale) == 0.0

    def test_single_axis_overhang(self, scale, square_shade):
        posts = [Post(50.0, 50.0), Post(150.0, 50.0)]
        assert cantilever_span(posts, square_shade, scale) == pytest.approx(5.0)

    def test_axes_measured_independently(self, scale, square_shade):
        """Diagonal overhang takes the larger axis component, not the hypotenuse."""
        posts = [Post(50.0, 50.0), Post(120.0, -30.0)]
        assert cantilever_span(posts, square_shade, scale) == pytest.approx(3.0)

    def test_left_and_top_edges(self, square_shade):
        posts = [Post(-40.0, 50.0), Post(50.0, -70.0)]
        overhangs = post_overhangs(posts, square_shade)
        assert list(overhangs) == pytest.approx([40.0, 70.0])

    def test_monotone_as_post_moves_out(self, scale, square_shade):
        spans = []
        for x in [100.0, 110.0, 140.0, 200.0, 300.0]:
            posts = [Post(50.0, 50.0), Post(x, 130.0)]
            spans.append(cantilever_span(posts, square_shade, scale))
        assert spans == sorted(spans)
        assert spans[-1] == pytest.approx(20.0)


class TestCoverageArea:

    def test_no_rectangle(self, scale):
        assert coverage_area(None, scale) == 0.0

    def test_area_in_square_feet(self, scale):
        rect = ShadeRectangle(0.0, 0.0, 200.0, 150.0)
        assert coverage_area(rect, scale) == pytest.approx(300.0)

    def test_doubling_sides_quadruples_area(self, scale):
        small = coverage_area(ShadeRectangle(5.0, 5.0, 120.0, 80.0), scale)
        large = coverage_area(ShadeRectangle(5.0, 5.0, 240.0, 160.0), scale)
        assert large == pytest.approx(4 * small)

    def test_zero_area_rectangle(self, scale):
        assert coverage_area(ShadeRectangle(10.0, 10.0, 0.0, 50.0), scale) == 0.0


class TestNearestCoverPoint:

    def test_outside_corner(self, square_shade):
        assert nearest_cover_point(Post(130.0, -20.0), square_shade) == pytest.approx((100.0, 0.0))

    def test_outside_edge(self, square_shade):
        assert nearest_cover_point(Post(-25.0, 40.0), square_shade) == pytest.approx((0.0, 40.0))

    def test_inside_is_post_itself(self, square_shade):
        assert nearest_cover_point(Post(30.0, 60.0), square_shade) == pytest.approx((30.0, 60.0))

    def test_degenerate_rectangle(self):
        line = ShadeRectangle(0.0, 0.0, 100.0, 0.0)
        assert nearest_cover_point(Post(150.0, 20.0), line) == pytest.approx((100.0, 0.0))


class TestDistances:

    def test_pairwise_matrix(self, scale):
        posts = [Post(0.0, 0.0), Post(30.0, 40.0), Post(0.0, 100.0)]
        dist = pairwise_distances_ft(posts, scale)
        assert dist.shape == (3, 3)
        assert dist[0, 1] == pytest.approx(5.0)
        assert dist[1, 0] == pytest.approx(5.0)
        assert dist[0, 2] == pytest.approx(10.0)
        assert dist[2, 2] == 0.0

    def test_consecutive_spans_flag_target(self, scale):
        posts = [Post(0.0, 0.0), Post(100.0, 0.0), Post(100.0, 150.0)]
        spans = consecutive_spans(posts, scale, exact_distance_ft=10.0)
        assert [(s.index_a, s.index_b) for s in spans] == [(0, 1), (1, 2)]
        assert spans[0].on_target
        assert not spans[1].on_target
        assert spans[1].distance_ft == pytest.approx(15.0)

    def test_consecutive_spans_single_post(self, scale):
        assert consecutive_spans([Post(0.0, 0.0)], scale, 6.0) == []
