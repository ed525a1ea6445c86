"""
Unit tests for EngineProvider (lazy engine ownership).
"""

from bookmark_search.config import Settings
from bookmark_search.engine import EngineProvider, SemanticSearchEngine
from bookmark_search.semantic.synonyms import freeze_table


class TestGetOrCreate:
    """Test lazy creation and in-place rebuilds"""

    def test_no_bookmarks_builds_empty_engine(self):
        """Calling before any bookmarks exist returns a working, empty engine"""
        provider = EngineProvider()
        engine = provider.get_or_create()

        assert isinstance(engine, SemanticSearchEngine)
        assert engine.bookmarks == ()
        assert engine.search("anything") == []

    def test_first_call_builds(self, scenario_bookmarks):
        provider = EngineProvider()
        engine = provider.get_or_create(scenario_bookmarks)

        assert [b.id for b in engine.bookmarks] == ["b1", "b2"]
        assert provider.current is engine

    def test_later_call_rebuilds_same_instance(self, scenario_bookmarks, make_bookmark):
        """New bookmarks update the cached engine instead of replacing it"""
        provider = EngineProvider()
        engine = provider.get_or_create(scenario_bookmarks)

        again = provider.get_or_create([make_bookmark("b9", "Redis")])

        assert again is engine
        assert [b.id for b in engine.bookmarks] == ["b9"]

    def test_call_without_bookmarks_keeps_snapshot(self, scenario_bookmarks):
        provider = EngineProvider()
        engine = provider.get_or_create(scenario_bookmarks)

        assert provider.get_or_create() is engine
        assert len(engine.bookmarks) == 2

    def test_empty_list_is_a_rebuild(self, scenario_bookmarks):
        """An explicit empty list empties the cached engine"""
        provider = EngineProvider()
        engine = provider.get_or_create(scenario_bookmarks)

        provider.get_or_create([])
        assert engine.bookmarks == ()


class TestProviderState:
    """Test reset and option forwarding"""

    def test_reset(self, scenario_bookmarks):
        provider = EngineProvider()
        first = provider.get_or_create(scenario_bookmarks)
        provider.reset()

        assert provider.current is None
        assert provider.get_or_create() is not first

    def test_independent_providers(self, scenario_bookmarks):
        """Providers share no hidden global state"""
        one, two = EngineProvider(), EngineProvider()
        one.get_or_create(scenario_bookmarks)
        assert two.current is None

    def test_settings_and_options_forwarded(self, make_bookmark):
        table = freeze_table({"alpha": ["beta"]})
        provider = EngineProvider(settings=Settings(suggestion_limit=1), synonyms=table)
        engine = provider.get_or_create([make_bookmark("b1", "Notes", ai_tags=["beta"])])

        assert engine.settings.suggestion_limit == 1
        assert engine.synonyms is table
        assert [r.item.id for r in engine.search("alpha")] == ["b1"]
