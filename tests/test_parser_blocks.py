"""
Block-level parser tests

Tests nowiki blocks, lists, tables, headings, horizontal rules and the
way paragraphs are formed around them.
"""

import pytest

from wikicreole.lib.parser import Parser


@pytest.fixture
def parser():
    """Parser with the site prefixes used throughout these tests"""
    return Parser(url_base='/wiki/', img_base='/wiki/images/')


class TestParagraphs:
    """Test paragraph wrapping and per-call isolation"""

    def test_empty_source(self, parser):
        """Empty markup renders to an empty string"""
        assert parser.parse("") == ""

    def test_whitespace_only(self, parser):
        """Blank lines alone produce no paragraphs"""
        assert parser.parse("   \n\n  \t  \n") == ""

    def test_plain_text(self, parser):
        """Plain text becomes one escaped paragraph"""
        assert parser.parse("Just some words & more") == "<p>Just some words &amp; more</p>"

    def test_blank_line_separates_paragraphs(self, parser):
        """Blank lines split text into paragraphs, single newlines do not"""
        output = parser.parse("One\nstill one\n\nTwo")
        assert output == "<p>One\nstill one</p>\n<p>Two</p>"

    def test_reset_between_calls(self, parser):
        """Blocks from one parse never bleed into the next"""
        input1 = "=Title1=\nThis is a test of the reset method.\n\n*One\n**Two\n*Three"
        input2 = "This is a test of the reset method.\n\n{{{\nA block of preformatted text.\n}}}\n"

        expected1 = (
            "<h1>Title1</h1>\n<p>This is a test of the reset method.</p>\n"
            "<ul>\n<li>One\n<ul>\n<li>Two</li>\n</ul>\n</li>\n<li>Three</li>\n</ul>\n"
        )
        expected2 = "<p>This is a test of the reset method.</p>\n<pre>\nA block of preformatted text.\n</pre>"

        assert parser.parse(input1) == expected1
        assert parser.parse(input2) == expected2

    def test_same_input_same_output(self, parser):
        """Parsing is repeatable on one instance"""
        source = "* a\n* b\n\n|x|y|\n\n{{{\ncode\n}}}"
        assert parser.parse(source) == parser.parse(source)


class TestNowiki:
    """Test nowiki blocks and inline nowiki spans"""

    def test_nowiki_block(self, parser):
        """Nowiki block content is kept verbatim in <pre>"""
        source = "A paragraph.\n\n{{{\nSome text. some($code); \n//Some bold//\n}}}\n\nAnother paragraph."
        expected = "<p>A paragraph.</p>\n<pre>\nSome text. some($code); \n//Some bold//\n</pre>\n<p>Another paragraph.</p>"
        assert parser.parse(source) == expected

    def test_nowiki_block_at_document_start(self, parser):
        """A nowiki block on the very first line is still recognised"""
        assert parser.parse("{{{\ncode\n}}}") == "<pre>\ncode\n</pre>"

    def test_nowiki_block_is_escaped(self, parser):
        """HTML inside a nowiki block is escaped, not passed through"""
        assert parser.parse("{{{\n<b>x</b>\n}}}") == "<pre>\n&lt;b&gt;x&lt;/b&gt;\n</pre>"

    def test_nowiki_inline(self, parser):
        """Inline nowiki suppresses formatting inside the span"""
        source = 'Here is some inline text. {{{This should **be escaped**.}}}'
        expected = '<p>Here is some inline text. <tt>This should **be escaped**.</tt></p>'
        assert parser.parse(source) == expected

    def test_nowiki_inline_in_list_item(self, parser):
        """Inline nowiki travels with the list item that contains it"""
        expected = "<ul>\n<li>use <tt>**x**</tt> here</li>\n</ul>\n"
        assert parser.parse("* use {{{**x**}}} here") == expected

    def test_nowiki_inline_in_table_cell(self, parser):
        """Inline nowiki inside a cell is not split on its pipe"""
        output = parser.parse("|{{{a//b}}}|c|")
        assert "<td><tt>a//b</tt></td>" in output

    def test_nul_in_source_is_dropped(self, parser):
        """Placeholder delimiters typed by the user cannot forge a span"""
        output = parser.parse("x \x00NOWIKI_0\x00 {{{y}}}")
        assert output == "<p>x NOWIKI_0 <tt>y</tt></p>"


class TestLists:
    """Test nested ordered and unordered lists"""

    def test_simple_unordered_list(self, parser):
        """Flat bullet list"""
        expected = "<ul>\n<li>Alpha</li>\n<li>Beta</li>\n<li>Gamma</li>\n<li>Delta</li>\n</ul>\n"
        assert parser.parse("* Alpha\n* Beta\n* Gamma\n* Delta") == expected

    def test_simple_ordered_list(self, parser):
        """Flat numbered list"""
        expected = "<ol>\n<li>One</li>\n<li>Two</li>\n<li>Three</li>\n<li>Four</li>\n</ol>\n"
        assert parser.parse("# One\n# Two\n# Three\n# Four") == expected

    def test_ordered_list_funky_whitespace(self, parser):
        """Whitespace around the markers is ignored"""
        expected = "<ol>\n<li>One</li>\n<li>Two</li>\n<li>Three</li>\n<li>Four</li>\n</ol>\n"
        assert parser.parse(" #One\n # Two\n #Three\n# Four") == expected

    def test_simple_nested_ul(self, parser):
        """Second level list nests inside the open item"""
        expected = "<ul>\n<li>Item 1\n<ul>\n<li>Item 1.1</li>\n</ul>\n</li>\n<li>Item 2</li>\n</ul>\n"
        assert parser.parse("* Item 1\n** Item 1.1\n* Item 2") == expected

    def test_complicated_nested_list(self, parser):
        """Three levels of mixed lists with links and formatting"""
        source = """\
* FrontendController
## Does URL exist in //pages// table?
## Yes - what type is it?
### Static page: load model indicated by class_name and render
### Alias: grab what alias points to
### Function: Load controller indicated by class_name, get //ParamMap// from controller to remap params and call action
## No - bubble up the path
### Try to match each path segment above requested one. Matches must be a function, not static.
### If a match found load controller indicated by class_name, get //ParamMap// from controller to remap params and call action
### If no match found display 404 error
* Backend Controller/program flow
## Check PHP version, register_globals, magic_quotes
## Read in file with tm_bail function, only problem with reading in common.php before config.php is that common.php uses $db_config['prefix'] **Split common.php into check.php & bootstrap.php**
## Does [[http://www.wikipedia.org/wiki/installer|installer]] exist? Does config file exist?
### Installer & no config, include installer
### Installer & config, die
### No installer & no config, die
### Config & no installer, include installer
## Init Tm_Request object
## use hostname to set cookie constants
## Set error reporting
## date_default_timezone_set()
## session settings
## session_start()
## ob_start()
## Create [[Tm_AppController]] object with $db_config
## Connect to database & get options (Tm_Config object), allow to tm_bail
## Create Router object - do before checking auth since Auth may need to set error controller in router.
## Create View object
## Set Request, Router, View in AppController
## Check if user is auth'd
### if not send to errorNoAuth page
### User is auth'd, setup user/Locale settings
## Dispatch (Route)
## Render layout
## ob_end_flush()
* Plugins can do any/all of:
## Create a new page_type
## Register a content filter
*** Tm_ContentFilter::register()
*** $filter = Tm_ContentFilter::get('filter_name')
*** $html = $filter->parse($source)
## Register view helpers
*** Tm_ViewAbstract::registerHelper() or Tm_Helper_Abstract::register()"""

        expected = """\
<ul>
<li>FrontendController
<ol>
<li>Does URL exist in <em>pages</em> table?</li>
<li>Yes - what type is it?
<ol>
<li>Static page: load model indicated by class_name and render</li>
<li>Alias: grab what alias points to</li>
<li>Function: Load controller indicated by class_name, get <em>ParamMap</em> from controller to remap params and call action</li>
</ol>
</li>
<li>No - bubble up the path
<ol>
<li>Try to match each path segment above requested one. Matches must be a function, not static.</li>
<li>If a match found load controller indicated by class_name, get <em>ParamMap</em> from controller to remap params and call action</li>
<li>If no match found display 404 error</li>
</ol>
</li>
</ol>
</li>
<li>Backend Controller/program flow
<ol>
<li>Check PHP version, register_globals, magic_quotes</li>
<li>Read in file with tm_bail function, only problem with reading in common.php before config.php is that common.php uses $db_config[&#039;prefix&#039;] <strong>Split common.php into check.php &amp; bootstrap.php</strong></li>
<li>Does <a href="http://www.wikipedia.org/wiki/installer" class="external">installer</a> exist? Does config file exist?
<ol>
<li>Installer &amp; no config, include installer</li>
<li>Installer &amp; config, die</li>
<li>No installer &amp; no config, die</li>
<li>Config &amp; no installer, include installer</li>
</ol>
</li>
<li>Init Tm_Request object</li>
<li>use hostname to set cookie constants</li>
<li>Set error reporting</li>
<li>date_default_timezone_set()</li>
<li>session settings</li>
<li>session_start()</li>
<li>ob_start()</li>
<li>Create <a href="/wiki/Tm_AppController">Tm_AppController</a> object with $db_config</li>
<li>Connect to database &amp; get options (Tm_Config object), allow to tm_bail</li>
<li>Create Router object - do before checking auth since Auth may need to set error controller in router.</li>
<li>Create View object</li>
<li>Set Request, Router, View in AppController</li>
<li>Check if user is auth&#039;d
<ol>
<li>if not send to errorNoAuth page</li>
<li>User is auth&#039;d, setup user/Locale settings</li>
</ol>
</li>
<li>Dispatch (Route)</li>
<li>Render layout</li>
<li>ob_end_flush()</li>
</ol>
</li>
<li>Plugins can do any/all of:
<ol>
<li>Create a new page_type</li>
<li>Register a content filter
<ul>
<li>Tm_ContentFilter::register()</li>
<li>$filter = Tm_ContentFilter::get(&#039;filter_name&#039;)</li>
<li>$html = $filter-&gt;parse($source)</li>
</ul>
</li>
<li>Register view helpers
<ul>
<li>Tm_ViewAbstract::registerHelper() or Tm_Helper_Abstract::register()</li>
</ul>
</li>
</ol>
</li>
</ul>
"""
        output = parser.parse(source)
        assert output == expected
        assert output.count("<ul>") == output.count("</ul>")
        assert output.count("<ol>") == output.count("</ol>")

    def test_type_change_at_same_level(self, parser):
        """Switching marker at one level closes the list and opens the other kind"""
        expected = "<ul>\n<li>a</li>\n</ul>\n\n<ol>\n<li>b</li>\n</ol>\n"
        assert parser.parse("* a\n# b") == expected

    def test_depth_jump_left_as_text(self, parser):
        """A jump of two levels leaves the run as paragraph text"""
        result = parser.document_parse("* a\n*** b")
        assert result.html == "<p>* a\n*** b</p>"
        assert len(result.warnings) == 1
        assert "nesting" in result.warnings[0]

    def test_bold_line_is_not_a_list(self, parser):
        """A line starting with '**' is bold text, not a second level item"""
        assert parser.parse("**Bold** start") == "<p><strong>Bold</strong> start</p>"

    def test_list_ends_at_plain_line(self, parser):
        """A line without a marker ends the list run"""
        output = parser.parse("* a\n* b\nafter")
        assert output == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n\n<p>after</p>"


class TestTables:
    """Test table rows, header cells and markup inside cells"""

    def test_simple_table(self, parser):
        """Plain cells become <td>"""
        source = "|Irene|Paul|\n|Wife|Husband|\n|28|34|\n|IT|Engineer|"
        expected = (
            "<table>\n"
            "<tr>\n<td>Irene</td>\n<td>Paul</td>\n</tr>\n"
            "<tr>\n<td>Wife</td>\n<td>Husband</td>\n</tr>\n"
            "<tr>\n<td>28</td>\n<td>34</td>\n</tr>\n"
            "<tr>\n<td>IT</td>\n<td>Engineer</td>\n</tr>\n"
            "</table>\n"
        )
        assert parser.parse(source) == expected

    def test_table_horizontal_header(self, parser):
        """'=' cells in the first row become <th>"""
        source = "|=Name|=Relationship|=Age|=Occupation|\n|Irene|Wife|28|IT|\n|Paul|Husband|34|Engineer|"
        expected = (
            "<table>\n"
            "<tr>\n<th>Name</th>\n<th>Relationship</th>\n<th>Age</th>\n<th>Occupation</th>\n</tr>\n"
            "<tr>\n<td>Irene</td>\n<td>Wife</td>\n<td>28</td>\n<td>IT</td>\n</tr>\n"
            "<tr>\n<td>Paul</td>\n<td>Husband</td>\n<td>34</td>\n<td>Engineer</td>\n</tr>\n"
            "</table>\n"
        )
        assert parser.parse(source) == expected

    def test_table_vertical_header(self, parser):
        """'=' cells in the first column become <th>"""
        source = "|=Name|Irene|Paul|\n|=Relationship|Wife|Husband|\n|=Age|28|34|\n|=Occupation|IT|Engineer|"
        expected = (
            "<table>\n"
            "<tr>\n<th>Name</th>\n<td>Irene</td>\n<td>Paul</td>\n</tr>\n"
            "<tr>\n<th>Relationship</th>\n<td>Wife</td>\n<td>Husband</td>\n</tr>\n"
            "<tr>\n<th>Age</th>\n<td>28</td>\n<td>34</td>\n</tr>\n"
            "<tr>\n<th>Occupation</th>\n<td>IT</td>\n<td>Engineer</td>\n</tr>\n"
            "</table>\n"
        )
        assert parser.parse(source) == expected

    def test_markup_in_tables(self, parser):
        """Links and spans inside cells survive the cell split"""
        source = (
            "|=Directory|=Software Package|=Installed Version|=Current Version|\n"
            "|blog|[[http://wordpress.org|Wordpress]]|3.0.5|3.0.5|\n"
            "|forum|phpBB|3.0.5|**3.0.7pl1**|\n"
            "|gallery2|[[Gallery|Menalto Gallery]]|2.3.3|//3.0//|\n"
            "|kitchen|[[Wordpress]]|3.0.5|3.0.5|"
        )
        expected = (
            "<table>\n"
            "<tr>\n<th>Directory</th>\n<th>Software Package</th>\n<th>Installed Version</th>\n<th>Current Version</th>\n</tr>\n"
            "<tr>\n<td>blog</td>\n<td><a href=\"http://wordpress.org\" class=\"external\">Wordpress</a></td>\n<td>3.0.5</td>\n<td>3.0.5</td>\n</tr>\n"
            "<tr>\n<td>forum</td>\n<td>phpBB</td>\n<td>3.0.5</td>\n<td><strong>3.0.7pl1</strong></td>\n</tr>\n"
            "<tr>\n<td>gallery2</td>\n<td><a href=\"/wiki/Gallery\">Menalto Gallery</a></td>\n<td>2.3.3</td>\n<td><em>3.0</em></td>\n</tr>\n"
            "<tr>\n<td>kitchen</td>\n<td><a href=\"/wiki/Wordpress\">Wordpress</a></td>\n<td>3.0.5</td>\n<td>3.0.5</td>\n</tr>\n"
            "</table>\n"
        )
        assert parser.parse(source) == expected

    def test_image_with_alt_in_cell(self, parser):
        """Image alt text separated by '|' stays in one cell"""
        output = parser.parse("|{{a.png|Alt}}|b|")
        assert '<td><img src="/wiki/images/a.png" alt="Alt" /></td>' in output
        assert output.count("<td>") == 2

    def test_text_around_table(self, parser):
        """Paragraphs before and after a table are kept apart from it"""
        output = parser.parse("Before\n|=Name|=Age|\n|Paul|34|\nAfter")
        assert output.startswith("<p>Before</p>\n<table>\n")
        assert output.endswith("</table>\n\n<p>After</p>")


class TestHeadingsAndRules:
    """Test headings and horizontal rules"""

    def test_heading_h1(self, parser):
        """Single '=' gives <h1>"""
        assert parser.parse("=This is the page title.=") == "<h1>This is the page title.</h1>"

    def test_heading_h3(self, parser):
        """Three '=' give <h3>"""
        assert parser.parse("===This is a sub-section heading.===") == "<h3>This is a sub-section heading.</h3>"

    def test_heading_leading_whitespace(self, parser):
        """Leading whitespace before the '=' is allowed"""
        source = " ==This is still a heading despite of the leading space.=="
        assert parser.parse(source) == "<h2>This is still a heading despite of the leading space.</h2>"

    def test_no_bold_or_italic_in_headings(self, parser):
        """Heading text is not inline formatted"""
        source = "==This is an H2. **Maybe this is bold?** No. //How about italic?// No.=="
        expected = "<h2>This is an H2. **Maybe this is bold?** No. //How about italic?// No.</h2>"
        assert parser.parse(source) == expected

    def test_heading_no_closing_tags(self, parser):
        """Trailing '=' are optional"""
        source = "==This should still be rendered as a heading without the trailing tags."
        expected = "<h2>This should still be rendered as a heading without the trailing tags.</h2>"
        assert parser.parse(source) == expected

    def test_horizontal_rule(self, parser):
        """'----' on its own line splits the surrounding paragraphs"""
        source = "La-de-da this is some sample text.\n----\nThis is a new section."
        expected = "<p>La-de-da this is some sample text.</p>\n<hr />\n<p>This is a new section.</p>"
        assert parser.parse(source) == expected
