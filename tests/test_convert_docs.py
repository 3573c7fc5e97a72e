"""
Directory conversion tests

Walks a source tree, maps .md to .mdx and exercises the CLI entry point.
"""

import pytest

import convert_docs


@pytest.fixture
def source_tree(tmp_path, make_file):
    src = tmp_path / 'content'
    make_file('intro.md', '## Intro {#intro}\n', base=src)
    make_file('guides/setup.md', 'Use <src-path>\n', base=src)
    make_file('guides/_index.md', '---\ntitle: Guides\n---\n', base=src)
    make_file('_index.md', 'root index\n', base=src)
    make_file('notes.txt', 'not markdown\n', base=src)
    return src


class TestConvertTree:
    """convert_tree() maps the source tree onto the destination"""

    def test_converts_markdown_files(self, source_tree, tmp_path):
        dest = tmp_path / 'out'
        written = convert_docs.convert_tree(str(source_tree), str(dest))

        assert sorted(written) == ['guides/setup.mdx', 'intro.mdx']
        assert (dest / 'intro.mdx').read_text(encoding='utf-8') == '## Intro\n'
        assert (dest / 'guides' / 'setup.mdx').read_text(encoding='utf-8') == 'Use {"<"}src-path{">"}\n'

    def test_skips_index_and_other_files(self, source_tree, tmp_path):
        dest = tmp_path / 'out'
        convert_docs.convert_tree(str(source_tree), str(dest))

        assert not (dest / '_index.mdx').exists()
        assert not (dest / 'guides' / '_index.mdx').exists()
        assert not (dest / 'notes.txt').exists()
        assert not (dest / 'notes.mdx').exists()

    def test_destination_is_recreated(self, source_tree, tmp_path, make_file):
        """Stale output from a previous run is removed"""
        dest = tmp_path / 'out'
        make_file('stale.mdx', 'old\n', base=dest)

        convert_docs.convert_tree(str(source_tree), str(dest))

        assert not (dest / 'stale.mdx').exists()
        assert convert_docs.count_mdx_files(str(dest)) == 2

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            convert_docs.convert_tree(str(tmp_path / 'nope'), str(tmp_path / 'out'))


class TestMain:
    """Command-line behavior"""

    def test_reports_progress(self, source_tree, tmp_path, capsys):
        dest = tmp_path / 'out'
        convert_docs.main([str(source_tree), str(dest)])

        out = capsys.readouterr().out
        assert f"Converting docs from {source_tree} to {dest}" in out
        assert "Skipping _index.md" in out
        assert "Converting intro.md -> intro.mdx" in out
        assert "Conversion complete!" in out
        assert "Converted files: 2" in out

    def test_error_exits_nonzero(self, tmp_path, capsys):
        src = tmp_path / 'content'
        src.mkdir()
        (src / 'bad.md').write_bytes(b'\xff\xfe\n')

        with pytest.raises(SystemExit) as exc:
            convert_docs.main([str(src), str(tmp_path / 'out')])

        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_requires_two_arguments(self):
        with pytest.raises(SystemExit) as exc:
            convert_docs.main(['only-one'])
        assert exc.value.code == 2
