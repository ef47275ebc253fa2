"""
ProjStoreLib - Scrapbook page persistence

This module provides JSON record conversion for pages and canvas items and
the file-based page store.
"""

from SB_Libs.ProjStoreLib.page_store import (
    item_to_record,
    item_from_record,
    page_to_record,
    page_from_record,
    get_pages_dir,
    list_page_files,
    save_page,
    load_page,
    load_all_pages,
    delete_page,
    page_count,
    PageStore,
)

__all__ = [
    "item_to_record",
    "item_from_record",
    "page_to_record",
    "page_from_record",
    "get_pages_dir",
    "list_page_files",
    "save_page",
    "load_page",
    "load_all_pages",
    "delete_page",
    "page_count",
    "PageStore",
]
