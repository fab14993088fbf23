"""Thread safety tests for the math plugin.

The Markdown class documents that instances can render from several
threads. These tests verify that:
1. One shared instance renders documents concurrently without mixing output
2. Instances with different delimiters created concurrently do not interfere

These tests use real threading to catch actual concurrency bugs.
"""

from concurrent.futures import ThreadPoolExecutor

from mathspan import HidePolicy, Markdown


class TestPluginThreadSafety:
    """Verify plugins are thread-safe as documented."""

    def test_shared_instance_concurrent_render(self) -> None:
        """A single Markdown instance renders many documents in parallel."""
        md = Markdown()
        sources = [f"Value $x_{i}$ and block:\n$$\ny = {i}\n$$\n" for i in range(40)]
        expected = [md(source) for source in sources]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(md, sources))

        assert results == expected

    def test_concurrent_instances_different_delimiters(self) -> None:
        """Instances built in parallel keep their own delimiter and policy."""

        def build_and_render(i: int) -> tuple[str, str]:
            delimiter = "@" if i % 2 else "$"
            policy = HidePolicy.UTILITY_CLASS if i % 2 else HidePolicy.STYLE
            md = Markdown(delimiter=delimiter, hide_policy=policy)
            return delimiter, md(f"Sum {delimiter}a + {i}{delimiter}.")

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(build_and_render, range(20)))

        for delimiter, html in results:
            assert f"{delimiter}a" not in html
            if delimiter == "@":
                assert 'class="katex-html hidden"' in html
                assert "display:none" not in html
            else:
                assert 'style="display:none"' in html
