"""
Unit tests for pagination geometry and the relaxation engine.
"""

import pytest

from galley.contexts.layout import (
    CONTENT_HEIGHT,
    BlockGeometry,
    LayoutResult,
    PaginationEngine,
    StaticFlow,
    get_page_geometry,
    page_count_for,
    paginate,
)
from galley.contexts.layout.geometry import pages_for

# Three blocks: the second straddles the first boundary; once it is pushed,
# the third straddles the second boundary.
CASCADE_BLOCKS = [
    BlockGeometry(ordinal=0, top=0, bottom=1000),
    BlockGeometry(ordinal=1, top=1000, bottom=1100),
    BlockGeometry(ordinal=2, top=1100, bottom=2050),
]


@pytest.mark.unit
class TestGeometry:
    """Tests for page geometry helpers."""

    def test_a4_capacity(self):
        assert CONTENT_HEIGHT == 1043
        assert get_page_geometry("A4").content_height == 1043

    def test_letter_capacity(self):
        letter = get_page_geometry("letter")

        assert letter.content_height == 976
        assert letter.content_width == 728

    def test_default_page_size(self):
        assert get_page_geometry().name == "a4"

    def test_unknown_page_size(self):
        with pytest.raises(ValueError, match="not found"):
            get_page_geometry("tabloid")

    @pytest.mark.parametrize(
        "content_height, pages",
        [(0, 1), (1043, 1), (1044, 2), (2200, 3)],
    )
    def test_page_count(self, content_height, pages):
        assert page_count_for(content_height, 1043) == pages

    def test_page_offsets(self):
        pages = pages_for(3, 1043)

        assert [page.index for page in pages] == [0, 1, 2]
        assert pages[2].offset == -2086

    def test_block_ending_on_boundary_does_not_straddle(self):
        block = BlockGeometry(ordinal=0, top=843, bottom=1043)

        assert block.start_page(1043) == 0
        assert block.end_page(1043) == 0
        assert not block.straddles(1043)

    def test_block_crossing_boundary_straddles(self):
        assert BlockGeometry(ordinal=0, top=900, bottom=1200).straddles(1043)


@pytest.mark.unit
class TestStaticFlow:
    """Tests for the in-memory flow view."""

    def test_margin_shifts_block_and_everything_after(self):
        flow = StaticFlow(CASCADE_BLOCKS)
        flow.set_margin(1, 43)
        measured = flow.measure()

        assert measured[0].top == 0
        assert measured[1].top == 1043
        assert measured[2].top == 1143
        assert flow.content_height() == 2093

    def test_clear_margins(self):
        flow = StaticFlow(CASCADE_BLOCKS)
        flow.set_margin(2, 10)
        flow.clear_margins()

        assert flow.margins == {}
        assert flow.measure()[2].top == 1100


@pytest.mark.unit
class TestPaginate:
    """Tests for the relaxation algorithm."""

    def test_straddling_block_pushed_to_next_page(self):
        result = paginate([BlockGeometry(ordinal=0, top=900, bottom=1200)])

        assert result.corrections == {0: 143}
        assert result.page_count == 2
        assert result.converged
        assert result.is_valid

    def test_no_straddlers(self):
        result = paginate(
            [BlockGeometry(ordinal=0, top=0, bottom=500), BlockGeometry(ordinal=1, top=500, bottom=1043)]
        )

        assert result.corrections == {}
        assert result.page_count == 1
        assert result.iterations == 1

    def test_cascade_fixes_one_block_per_iteration(self):
        result = paginate(CASCADE_BLOCKS)

        assert result.corrections == {1: 43, 2: 943}
        assert result.iterations == 3
        assert result.content_height == 3036
        assert result.page_count == 3

    def test_oversized_block_left_alone(self):
        result = paginate([BlockGeometry(ordinal=0, top=500, bottom=1700)])

        assert result.corrections == {}
        assert result.oversized == {0: 1200}
        assert not result.is_valid
        assert "Block 0 is taller than one page" in result.get_issues()[0]

    def test_oversized_block_at_top(self):
        result = paginate([BlockGeometry(ordinal=0, top=0, bottom=1043)], capacity=1000)

        assert result.corrections == {}
        assert result.oversized == {0: 1043}

    def test_zero_height_block_skipped(self):
        result = paginate([BlockGeometry(ordinal=0, top=1500, bottom=1500)])
        assert result.corrections == {}

    def test_non_atomic_blocks_may_straddle(self):
        result = paginate([BlockGeometry(ordinal=0, top=900, bottom=1200, atomic=False)])
        assert result.corrections == {}

    def test_iteration_cap_reported(self):
        result = paginate(CASCADE_BLOCKS, max_iterations=1)

        assert result.corrections == {1: 43}
        assert result.iterations == 1
        assert not result.converged
        assert any("did not converge" in issue for issue in result.get_issues())

    def test_last_iteration_can_converge(self):
        result = paginate([BlockGeometry(ordinal=0, top=900, bottom=1200)], max_iterations=1)

        assert result.corrections == {0: 143}
        assert result.converged

    def test_custom_capacity(self):
        result = paginate([BlockGeometry(ordinal=0, top=900, bottom=1100)], capacity=976)

        assert result.corrections == {0: 76}
        assert result.capacity == 976


class ReentrantFlow(StaticFlow):
    """Flow whose measurement triggers another recompute (like a resize observer would)."""

    def __init__(self, blocks):
        super().__init__(blocks)
        self.engine = None
        self.inner_results = []

    def measure(self):
        self.inner_results.append(self.engine.recompute())
        return super().measure()


@pytest.mark.unit
class TestPaginationEngine:
    """Tests for replicas, listeners and reentrancy."""

    def test_replicas_receive_corrections(self):
        canonical = StaticFlow(CASCADE_BLOCKS)
        replica = StaticFlow(CASCADE_BLOCKS)
        engine = PaginationEngine(canonical)
        engine.attach(replica)

        engine.recompute()

        assert canonical.margins == {1: 43, 2: 943}
        assert replica.margins == {1: 43, 2: 943}

    def test_attach_after_recompute(self):
        engine = PaginationEngine(StaticFlow(CASCADE_BLOCKS))
        engine.recompute()

        replica = StaticFlow(CASCADE_BLOCKS)
        engine.attach(replica)

        assert replica.margins == {1: 43, 2: 943}

    def test_detached_replica_not_updated(self):
        engine = PaginationEngine(StaticFlow(CASCADE_BLOCKS))
        replica = StaticFlow(CASCADE_BLOCKS)
        engine.attach(replica)
        engine.detach(replica)

        engine.recompute()

        assert replica.margins == {}

    def test_recompute_is_repeatable(self):
        canonical = StaticFlow(CASCADE_BLOCKS)
        engine = PaginationEngine(canonical)

        first = engine.recompute()
        second = engine.recompute()

        assert first.corrections == second.corrections
        assert canonical.margins == {1: 43, 2: 943}
        assert engine.page_count == 3
        assert len(engine.pages()) == 3

    def test_listeners(self):
        engine = PaginationEngine(StaticFlow(CASCADE_BLOCKS))
        seen = []
        unsubscribe = engine.on_layout(seen.append)

        result = engine.recompute()
        unsubscribe()
        engine.recompute()

        assert seen == [result]

    def test_reentrant_recompute_returns_previous_result(self):
        flow = ReentrantFlow([BlockGeometry(ordinal=0, top=900, bottom=1200)])
        engine = PaginationEngine(flow)
        flow.engine = engine
        initial = engine.result

        result = engine.recompute()

        assert result.corrections == {0: 143}
        assert all(inner is initial for inner in flow.inner_results)
        assert engine.result is result

    def test_initial_result(self):
        engine = PaginationEngine(StaticFlow([]))

        assert isinstance(engine.result, LayoutResult)
        assert engine.page_count == 1

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            PaginationEngine(StaticFlow([]), capacity=0)
