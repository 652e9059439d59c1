"""Tests for traversal queries: connected links, neighbors, BFS/DFS, roots."""

import pytest

from conftest import element, ids, link


def _visits(graph, start_id, breadth_first, **opt):
    """Run a search and return [(id, distance), ...] in visiting order."""
    visits = []

    def visit(cell, distance):
        visits.append((cell.id, distance))

    graph.search(graph.get_cell(start_id), visit, breadth_first=breadth_first, **opt)
    return visits


# ─────────────────────────────────────────────────────────────────────────────
# Connected links
# ─────────────────────────────────────────────────────────────────────────────


class TestConnectedLinks:
    """Tests for get_connected_links."""

    def test_both_directions_outbound_first(self, chain):
        assert ids(chain.get_connected_links(chain.get_cell("b"))) == ["bc", "ab"]

    def test_single_direction(self, chain):
        b = chain.get_cell("b")
        assert ids(chain.get_connected_links(b, outbound=True)) == ["bc"]
        assert ids(chain.get_connected_links(b, inbound=True)) == ["ab"]

    def test_self_loop_listed_once(self, graph):
        graph.add_cells([element("a"), link("loop", "a", "a")])
        assert ids(graph.get_connected_links(graph.get_cell("a"))) == ["loop"]

    def test_isolated_cell_has_no_links(self, chain):
        assert chain.get_connected_links(chain.get_cell("d")) == []

    def test_indirect_follows_link_to_link(self, graph):
        graph.add_cells([
            element("a"),
            element("b"),
            link("l1", "a", "b"),
            link("l2", "l1", "b"),
        ])
        a = graph.get_cell("a")
        assert ids(graph.get_connected_links(a)) == ["l1"]
        assert ids(graph.get_connected_links(a, indirect=True)) == ["l1", "l2"]

    def test_indirect_walks_long_link_chain(self, graph):
        graph.add_cells(
            [element("e"), link("l0", "e", None)]
            + [link(f"l{i}", f"l{i - 1}", None) for i in range(1, 1500)]
        )
        found = graph.get_connected_links(graph.get_cell("e"), indirect=True)
        assert ids(found) == [f"l{i}" for i in range(1500)]


@pytest.fixture
def nested(graph):
    """Container p holding x and y; o and o2 outside.

    Links: xy (x->y, enclosed), xo (x->o), o2y (o2->y).
    """
    graph.add_cells([
        element("p"),
        element("x"),
        element("y"),
        element("o"),
        element("o2"),
        link("xy", "x", "y"),
        link("xo", "x", "o"),
        link("o2y", "o2", "y"),
    ])
    graph.get_cell("p").embed([graph.get_cell("x"), graph.get_cell("y")])
    return graph


class TestDeep:
    """Tests for deep queries over embedded cells."""

    def test_deep_skips_enclosed_links(self, nested):
        p = nested.get_cell("p")
        assert nested.get_connected_links(p) == []
        assert ids(nested.get_connected_links(p, deep=True)) == ["xo", "o2y"]

    def test_deep_include_enclosed(self, nested):
        p = nested.get_cell("p")
        found = nested.get_connected_links(p, deep=True, include_enclosed=True)
        assert ids(found) == ["xy", "xo", "o2y"]

    def test_deep_neighbors_exclude_embedded_cells(self, nested):
        p = nested.get_cell("p")
        assert ids(nested.get_neighbors(p, deep=True)) == ["o", "o2"]

    def test_deep_loop_between_embedded_and_container(self, graph):
        graph.add_cells([element("p"), element("x"), link("px", "p", "x")])
        graph.get_cell("p").embed(graph.get_cell("x"))
        assert graph.get_cell("px").has_loop(deep=True)
        assert not graph.get_cell("px").has_loop()


# ─────────────────────────────────────────────────────────────────────────────
# Neighbors
# ─────────────────────────────────────────────────────────────────────────────


class TestNeighbors:
    """Tests for get_neighbors / is_neighbor."""

    def test_neighbors_of_middle_node(self, chain):
        b = chain.get_cell("b")
        assert ids(chain.get_neighbors(b)) == ["c", "a"]
        assert ids(chain.get_neighbors(b, outbound=True)) == ["c"]
        assert ids(chain.get_neighbors(b, inbound=True)) == ["a"]

    def test_self_loop_neighbor_is_itself_once(self, graph):
        graph.add_cells([element("a"), link("loop", "a", "a")])
        assert ids(graph.get_neighbors(graph.get_cell("a"))) == ["a"]

    def test_parallel_links_give_one_neighbor(self, graph):
        graph.add_cells([element("a"), element("b"), link("l1", "a", "b"), link("l2", "a", "b")])
        assert ids(graph.get_neighbors(graph.get_cell("a"))) == ["b"]

    def test_neighbors_of_link_are_its_ends(self, chain):
        assert ids(chain.get_neighbors(chain.get_cell("ab"))) == ["a", "b"]

    def test_is_neighbor(self, chain):
        a, b, c = chain.get_cell("a"), chain.get_cell("b"), chain.get_cell("c")
        assert chain.is_neighbor(a, b)
        assert not chain.is_neighbor(a, c)
        assert chain.is_neighbor(b, a, inbound=True)
        assert not chain.is_neighbor(b, a, outbound=True)


# ─────────────────────────────────────────────────────────────────────────────
# Search
# ─────────────────────────────────────────────────────────────────────────────


class TestSearch:
    """Tests for bfs / dfs / search."""

    def test_bfs_order_and_distance(self, tree):
        visits = _visits(tree, "a", breadth_first=True, outbound=True)
        assert visits == [("a", 0), ("b", 1), ("c", 1), ("d", 2)]

    def test_dfs_explores_first_neighbor_first(self, tree):
        visits = _visits(tree, "a", breadth_first=False, outbound=True)
        assert visits == [("a", 0), ("b", 1), ("d", 2), ("c", 1)]

    @pytest.mark.parametrize("breadth_first", [True, False])
    def test_each_cell_visited_once(self, tree, breadth_first):
        visits = _visits(tree, "d", breadth_first=breadth_first)
        visited = [cell_id for cell_id, _ in visits]
        assert sorted(visited) == ["a", "b", "c", "d"]
        assert visited[0] == "d"

    @pytest.mark.parametrize("breadth_first", [True, False])
    def test_false_prunes_branch(self, chain, breadth_first):
        visited = []

        def visit(cell, distance):
            visited.append(cell.id)
            if cell.id == "b":
                return False
            return None

        chain.search(chain.get_cell("a"), visit, breadth_first=breadth_first, outbound=True)
        assert visited == ["a", "b"]

    def test_search_on_cycle_terminates(self, graph):
        graph.add_cells([element("x"), element("y"), link("xy", "x", "y"), link("yx", "y", "x")])
        assert _visits(graph, "x", breadth_first=True) == [("x", 0), ("y", 1)]
        assert _visits(graph, "x", breadth_first=False) == [("x", 0), ("y", 1)]


# ─────────────────────────────────────────────────────────────────────────────
# Successors / predecessors
# ─────────────────────────────────────────────────────────────────────────────


class TestReachability:
    """Tests for successors, predecessors and their predicates."""

    def test_successors(self, chain):
        assert ids(chain.get_successors(chain.get_cell("a"))) == ["b", "c"]
        assert chain.get_successors(chain.get_cell("c")) == []

    def test_predecessors(self, chain):
        assert ids(chain.get_predecessors(chain.get_cell("c"))) == ["b", "a"]

    def test_successors_breadth_first(self, tree):
        assert ids(tree.get_successors(tree.get_cell("a"), breadth_first=True)) == ["b", "c", "d"]
        assert ids(tree.get_successors(tree.get_cell("a"))) == ["b", "d", "c"]

    def test_is_successor_and_predecessor(self, chain):
        a, c, d = chain.get_cell("a"), chain.get_cell("c"), chain.get_cell("d")
        assert chain.is_successor(a, c)
        assert not chain.is_successor(c, a)
        assert not chain.is_successor(a, d)
        assert chain.is_predecessor(c, a)
        assert not chain.is_predecessor(a, c)

    def test_successors_in_cycle_exclude_start(self, graph):
        graph.add_cells([element("x"), element("y"), link("xy", "x", "y"), link("yx", "y", "x")])
        assert ids(graph.get_successors(graph.get_cell("x"))) == ["y"]


# ─────────────────────────────────────────────────────────────────────────────
# Sources and sinks
# ─────────────────────────────────────────────────────────────────────────────


def test_sources_and_sinks(chain):
    assert ids(chain.get_sources()) == ["a", "d"]
    assert ids(chain.get_sinks()) == ["c", "d"]
    assert chain.is_source(chain.get_cell("a"))
    assert not chain.is_source(chain.get_cell("b"))
    assert chain.is_sink(chain.get_cell("c"))


def test_sources_update_after_relink(chain):
    chain.get_cell("ab").set_source(chain.get_cell("d"))
    assert ids(chain.get_sources()) == ["a", "d"]
    assert ids(chain.get_sinks()) == ["a", "c"]
