"""
Unit tests for the Snowball stemmer adapter.
"""

from way_match.bm25.stemmer import Stemmer


class TestStemmer:
    """Porter2 stemming with explicit lifecycle"""

    def test_common_words(self, stemmer):
        """Snowball reduces words to their root"""
        assert stemmer.stem("running") == "run"
        assert stemmer.stem("deployment") == "deploy"
        assert stemmer.stem("kubernetes") == "kubernet"
        assert stemmer.stem("strategies") == "strategi"

    def test_idempotent_on_stems(self, stemmer):
        """Stemming an already-stemmed common word returns it unchanged"""
        assert stemmer.stem("run") == "run"
        assert stemmer.stem(stemmer.stem("deploying")) == "deploy"

    def test_short_words_pass_through(self, stemmer):
        """Words under 3 letters are never stemmed"""
        assert stemmer.stem("as") == "as"
        assert stemmer.stem("") == ""

    def test_closed_stemmer_passes_through(self):
        """After close() words come back unchanged"""
        instance = Stemmer()
        assert instance.available
        instance.close()
        assert not instance.available
        assert instance.stem("running") == "running"

    def test_close_is_idempotent(self):
        """Closing twice is harmless"""
        instance = Stemmer()
        instance.close()
        instance.close()
        assert not instance.available

    def test_context_manager_releases(self):
        """Leaving the with-block releases the instance, even on errors"""
        try:
            with Stemmer() as instance:
                assert instance.stem("searching") == "search"
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert not instance.available

    def test_capacity_limit(self):
        """Stems that would not fit the buffer keep the original word"""
        with Stemmer(capacity=4) as instance:
            assert instance.stem("running") == "run"
            assert instance.stem("deployment") == "deployment"
