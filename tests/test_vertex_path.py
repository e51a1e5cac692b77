"""
path (VertexPath) 模块单元测试
"""

import numpy as np
import pytest

from catmull_rom_path import (
    EvaluationOptions,
    InsufficientPointsError,
    ParameterRangeError,
    SegmentIndexError,
    VertexGroup,
    VertexPath,
)
from catmull_rom_path.datasets import helix, patrol_route, straight_line
from catmull_rom_path.utils.geometry import normalize


def distance_to_line(points, origin, direction):
    """点到直线的垂直距离"""
    rel = np.asarray(points, dtype=float) - origin
    return np.linalg.norm(np.cross(rel, normalize(direction)), axis=-1)


class ArraySource:
    """最小点源实现，只提供 count() 和 position_at()"""

    def __init__(self, points):
        self.points = np.asarray(points, dtype=float)

    def count(self):
        return len(self.points)

    def position_at(self, index):
        return self.points[index]


class TestVertexPath:
    """VertexPath 主类测试"""

    @pytest.fixture
    def path(self):
        return VertexPath.from_points(helix(9))

    def test_initialization(self, path):
        assert path.count == 9
        assert path.segment_count == 6
        assert path.loop is True
        assert path.options.strict is False

    def test_rejects_non_source(self):
        with pytest.raises(TypeError):
            VertexPath(object())

    def test_concrete_scenario(self):
        path = VertexPath.from_points(straight_line(4))
        np.testing.assert_allclose(path.interpolate(0.5), [1.5, 0.0, 0.0])
        np.testing.assert_allclose(path.velocity(0.5), [1.0, 0.0, 0.0])
        np.testing.assert_allclose(path.interpolate(1.0), path.interpolate_clamped(1, 1.0))

    def test_endpoints(self):
        """t=0 在第二个控制点，t=1 在倒数第二个控制点"""
        points = patrol_route()
        path = VertexPath.from_points(points)
        np.testing.assert_allclose(path.interpolate(0.0), points[1], atol=1e-12)
        np.testing.assert_allclose(path.interpolate(1.0), points[-2], atol=1e-12)

    def test_loop_flag_not_used(self):
        """闭合标志不影响求值，路径不会绕回起点"""
        points = patrol_route()
        open_path = VertexPath.from_points(points, loop=False)
        closed_path = VertexPath.from_points(points, loop=True)
        for t in np.linspace(0, 1, 11):
            np.testing.assert_allclose(open_path.interpolate(t), closed_path.interpolate(t))
            np.testing.assert_allclose(open_path.velocity(t), closed_path.velocity(t))

    def test_custom_point_source(self):
        """任意实现 count/position_at 的对象都可作为点源"""
        points = helix(6)
        path = VertexPath(ArraySource(points))
        reference = VertexPath.from_points(points)
        t_values = np.linspace(0, 1, 9)
        np.testing.assert_allclose(path.interpolate_batch(t_values), reference.interpolate_batch(t_values))
        np.testing.assert_allclose(path.velocity(0.3), reference.velocity(0.3))

    def test_batch_reads_through_position_at(self):
        """批量求值只通过 position_at 读取点源"""

        class ShadowedSource(ArraySource):
            def positions(self):
                return np.zeros_like(self.points)

        points = helix(6)
        path = VertexPath(ShadowedSource(points))
        t_values = np.linspace(0, 1, 7)
        expected = np.array([path.interpolate(t) for t in t_values])
        np.testing.assert_allclose(path.interpolate_batch(t_values), expected)
        _, positions, _ = path.sample_uniform(7)
        np.testing.assert_allclose(positions, expected)

    def test_source_with_2d_positions(self):
        """点源返回非 3D 位置时报错，而不是返回二维结果"""
        path = VertexPath(ArraySource([[0, 0], [1, 0], [2, 0], [3, 0]]))
        with pytest.raises(ValueError):
            path.interpolate(0.5)
        with pytest.raises(ValueError):
            path.velocity_clamped(1, 0.5)
        with pytest.raises(ValueError):
            path.interpolate_batch(np.array([0.5]))

    def test_non_finite_parameter(self):
        path = VertexPath.from_points(straight_line(5))
        with pytest.raises(ParameterRangeError):
            path.interpolate(float("inf"))
        with pytest.raises(ParameterRangeError):
            path.velocity_batch(np.array([0.1, np.nan]))

    def test_reflects_source_mutation(self):
        """点源修改后下一次求值立即生效"""
        group = VertexGroup.from_points(straight_line(4))
        path = VertexPath(group)
        np.testing.assert_allclose(path.interpolate(1.0), [2.0, 0.0, 0.0])

        group.add([4.0, 0.0, 0.0])
        assert path.segment_count == 2
        np.testing.assert_allclose(path.interpolate(1.0), [3.0, 0.0, 0.0])

        group.pop()
        group.pop()
        with pytest.raises(InsufficientPointsError):
            path.interpolate(0.5)

    def test_direction(self):
        path = VertexPath.from_points(straight_line(5, spacing=3.0, direction=(0.0, 1.0, 0.0)))
        np.testing.assert_allclose(path.direction(0.4), [0.0, 1.0, 0.0])

    def test_direction_zero_velocity(self):
        """重合点速度为零，方向为零向量"""
        path = VertexPath.from_points(np.ones((4, 3)))
        np.testing.assert_allclose(path.direction(0.5), [0.0, 0.0, 0.0])

    def test_repr(self, path):
        assert repr(path) == "VertexPath(N=9, segments=6, loop=True)"


class TestStraightPath:
    """共线等间距路径"""

    @pytest.fixture
    def path(self):
        return VertexPath.from_points(straight_line(6, direction=(1.0, 1.0, 1.0)))

    def test_positions_collinear(self, path):
        points = path.source.positions()
        _, positions, velocities = path.sample_uniform(101)
        distances = distance_to_line(positions, points[0], points[-1] - points[0])
        np.testing.assert_allclose(distances, 0.0, atol=1e-12)

    def test_velocity_parallel(self, path):
        points = path.source.positions()
        _, _, velocities = path.sample_uniform(101)
        np.testing.assert_allclose(distance_to_line(velocities, np.zeros(3), points[1] - points[0]), 0.0, atol=1e-12)

    def test_length(self, path):
        """内部点之间的跨度: 3 段，每段长 1"""
        np.testing.assert_allclose(path.segment_lengths(), [1.0, 1.0, 1.0], rtol=1e-9)
        assert np.isclose(path.length(), 3.0, rtol=1e-9)

    def test_parameter_at_length(self, path):
        assert np.isclose(path.parameter_at_length(1.5), 0.5, atol=1e-9)
        assert np.isclose(path.parameter_at_length(0.0), 0.0)
        assert np.isclose(path.parameter_at_length(1.0), 1.0 / 3.0, atol=1e-9)
        assert np.isclose(path.parameter_at_length(3.0), 1.0, atol=1e-9)

    def test_parameter_at_length_clipped(self, path):
        assert np.isclose(path.parameter_at_length(-5.0), 0.0)
        assert np.isclose(path.parameter_at_length(100.0), 1.0, atol=1e-9)


class TestBatchAndSampling:
    """批量求值和采样"""

    @pytest.fixture
    def path(self):
        return VertexPath.from_points(patrol_route())

    def test_batch_matches_scalar(self, path):
        t_values = np.linspace(0, 1, 29)
        positions = path.interpolate_batch(t_values)
        velocities = path.velocity_batch(t_values)
        for t, pos, vel in zip(t_values, positions, velocities):
            np.testing.assert_allclose(pos, path.interpolate(t), atol=1e-12)
            np.testing.assert_allclose(vel, path.velocity(t), atol=1e-12)

    def test_sample_uniform(self, path):
        t_values, positions, velocities = path.sample_uniform(50)
        assert t_values.shape == (50,)
        assert positions.shape == (50, 3)
        assert velocities.shape == (50, 3)
        np.testing.assert_allclose(t_values, np.linspace(0, 1, 50))
        np.testing.assert_allclose(positions[0], patrol_route()[1], atol=1e-12)
        np.testing.assert_allclose(positions[-1], patrol_route()[-2], atol=1e-12)

    def test_sample_uniform_too_few(self, path):
        with pytest.raises(ValueError):
            path.sample_uniform(1)


class TestArcLength:
    """弧长与弧长反求"""

    @pytest.fixture
    def path(self):
        return VertexPath.from_points(helix(12))

    def test_length_matches_polyline(self, path):
        """总弧长与密集折线长度一致"""
        positions = path.interpolate_batch(np.linspace(0, 1, 20001))
        polyline = np.sum(np.linalg.norm(np.diff(positions, axis=0), axis=1))
        assert np.isclose(path.length(), polyline, rtol=1e-6)

    def test_segment_length_bad_anchor(self, path):
        with pytest.raises(SegmentIndexError):
            path.segment_length(0)
        with pytest.raises(SegmentIndexError):
            path.segment_length(path.count - 2)

    def test_parameter_at_length_monotonic(self, path):
        total = path.length()
        t_values = [path.parameter_at_length(l) for l in np.linspace(0, total, 15)]
        assert np.all(np.diff(t_values) > 0)
        assert np.isclose(t_values[0], 0.0)
        assert np.isclose(t_values[-1], 1.0, atol=1e-9)

    def test_parameter_at_length_roundtrip(self, path):
        """反求参数处的累积弧长等于输入弧长"""
        lengths = path.segment_lengths()
        target = lengths[0] + 0.4 * lengths[1]
        t = path.parameter_at_length(target)
        num_sections = path.segment_count
        assert 1.0 / num_sections < t < 2.0 / num_sections

        positions = path.interpolate_batch(np.linspace(0, t, 20001))
        polyline = np.sum(np.linalg.norm(np.diff(positions, axis=0), axis=1))
        assert np.isclose(polyline, target, rtol=1e-6)

    def test_insufficient_points(self):
        path = VertexPath.from_points(straight_line(3))
        assert path.segment_count == 0
        with pytest.raises(InsufficientPointsError):
            path.length()


class TestOptions:
    """严格模式与宽松模式"""

    def test_permissive_extrapolates(self):
        path = VertexPath.from_points(straight_line(4))
        np.testing.assert_allclose(path.interpolate(1.5), [2.5, 0.0, 0.0])
        np.testing.assert_allclose(path.interpolate_clamped(1, -1.0), [0.0, 0.0, 0.0])

    def test_strict_rejects(self):
        path = VertexPath.from_points(straight_line(4), options=EvaluationOptions(strict=True))
        with pytest.raises(ParameterRangeError):
            path.interpolate(1.5)
        with pytest.raises(ParameterRangeError):
            path.velocity_clamped(1, -0.1)
        with pytest.raises(ParameterRangeError):
            path.interpolate_batch(np.array([0.0, 0.5, 1.1]))
        with pytest.raises(ParameterRangeError):
            path.velocity_batch(np.array([-0.1]))

    def test_strict_accepts_range(self):
        path = VertexPath.from_points(straight_line(4), options=EvaluationOptions(strict=True))
        np.testing.assert_allclose(path.interpolate(0.0), [1.0, 0.0, 0.0])
        np.testing.assert_allclose(path.interpolate(1.0), [2.0, 0.0, 0.0])
        assert np.isclose(path.length(), 1.0)

    def test_negative_t_is_index_error(self):
        path = VertexPath.from_points(straight_line(5))
        with pytest.raises(SegmentIndexError):
            path.interpolate(-0.2)
        with pytest.raises(SegmentIndexError):
            path.interpolate_batch(np.array([-0.2, 0.5]))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
