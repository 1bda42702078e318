# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.

"""Page through all docs, design docs, views, Cloudant Query and search.

Key based pagers (all docs, design docs and views) fetch one row more than
the page size and use that row's key to start the next page. Bookmark
pagers (find and search) pass along the bookmark of the previous page.

::

    pager = new_pager(client, PagerType.POST_ALL_DOCS, db="orders", limit=50)
    for row in pager.rows():
        ...
"""

import enum


MIN_LIMIT = 1
MAX_LIMIT = 200
DEFAULT_LIMIT = 20


class PagerType(enum.Enum):
    POST_ALL_DOCS = "post_all_docs"
    POST_DESIGN_DOCS = "post_design_docs"
    POST_VIEW = "post_view"
    POST_FIND = "post_find"
    POST_SEARCH = "post_search"
    POST_PARTITION_ALL_DOCS = "post_partition_all_docs"
    POST_PARTITION_VIEW = "post_partition_view"
    POST_PARTITION_FIND = "post_partition_find"
    POST_PARTITION_SEARCH = "post_partition_search"


class NoMoreResultsError(Exception):
    pass


class BasePager(object):
    INVALID_OPTIONS = ()

    def __init__(self, operation, options):
        self.validate(options)
        self._operation = operation
        self._initial_options = dict(options)
        self._options = dict(options)
        self._page_size = options.get("limit") or DEFAULT_LIMIT
        self._has_next = True
        self._error = None

    @classmethod
    def validate(cls, options):
        limit = options.get("limit")
        if limit is not None:
            if limit < MIN_LIMIT:
                raise ValueError(
                    "The provided limit {} is lower than the minimum page size "
                    "value of {}.".format(limit, MIN_LIMIT)
                )
            if limit > MAX_LIMIT:
                raise ValueError(
                    "The provided limit {} exceeds the maximum page size value "
                    "of {}.".format(limit, MAX_LIMIT)
                )
        for name in cls.INVALID_OPTIONS:
            if options.get(name) is not None:
                raise ValueError(
                    'The option "{}" is invalid when using pagination.'.format(name)
                )

    def has_next(self):
        return self._has_next

    def get_next(self):
        if self._error is not None:
            raise self._error
        if not self._has_next:
            raise NoMoreResultsError("No more results available.")
        return self._next_page()

    def get_all(self):
        try:
            return list(self.rows())
        except Exception:
            self._options = dict(self._initial_options)
            self._has_next = True
            self._error = None
            raise

    def pages(self):
        while self.has_next():
            yield self.get_next()

    def rows(self):
        for page in self.pages():
            for row in page:
                yield row

    def _next_page(self):
        raise NotImplementedError()


class KeyPager(BasePager):
    INVALID_OPTIONS = ("keys",)

    def _next_page(self):
        opts = dict(self._options)
        opts["limit"] = self._page_size + 1
        rows = self._operation(**opts).get_result()["rows"]
        if len(rows) <= self._page_size:
            self._has_next = False
            return rows
        page, extra = rows[:-1], rows[-1]
        self._options.pop("skip", None)
        self._error = self._check_boundary(page[-1], extra)
        if self._error is None:
            self._set_start(extra)
        return page

    def _check_boundary(self, last, extra):
        return None

    def _set_start(self, row):
        self._options["start_key"] = row["key"]


class ViewPager(KeyPager):
    def _check_boundary(self, last, extra):
        # the page is still returned, the next one cannot be fetched
        if last["key"] == extra["key"] and last["id"] == extra["id"]:
            return ValueError(
                "Cannot paginate on a boundary containing identical keys "
                "{!r} and document IDs {!r}".format(extra["key"], extra["id"])
            )
        return None

    def _set_start(self, row):
        self._options["start_key"] = row["key"]
        self._options["start_key_doc_id"] = row["id"]


class BookmarkPager(BasePager):
    ITEMS = "rows"

    def _next_page(self):
        opts = dict(self._options)
        opts["limit"] = self._page_size
        result = self._operation(**opts).get_result()
        items = result[self.ITEMS]
        if len(items) < self._page_size:
            self._has_next = False
        else:
            self._options.pop("skip", None)
            self._options["bookmark"] = result["bookmark"]
        return items


class FindPager(BookmarkPager):
    ITEMS = "docs"


class SearchPager(BookmarkPager):
    INVALID_OPTIONS = ("counts", "group_field", "group_limit", "group_sort", "ranges")


PAGERS = {
    PagerType.POST_ALL_DOCS: KeyPager,
    PagerType.POST_DESIGN_DOCS: KeyPager,
    PagerType.POST_VIEW: ViewPager,
    PagerType.POST_FIND: FindPager,
    PagerType.POST_SEARCH: SearchPager,
    PagerType.POST_PARTITION_ALL_DOCS: KeyPager,
    PagerType.POST_PARTITION_VIEW: ViewPager,
    PagerType.POST_PARTITION_FIND: FindPager,
    PagerType.POST_PARTITION_SEARCH: SearchPager,
}


def new_pager(client, pager_type, **options):
    cls = PAGERS[pager_type]
    return cls(getattr(client, pager_type.value), options)
