"""
Mapper for the favourite tags table of a user profile.

Every row of ``table.fav-tags`` describes one tag; the cells are read by
position, so the whole list of ``td`` elements is handed over at once.
"""

from __future__ import annotations

from typing import List

from bs4.element import Tag

from shinden.mappers.base import BaseDocumentMapper
from shinden.models import FavouriteTag


class UserFavouriteTagsMapper(BaseDocumentMapper):
    mapper_code = 'user.favourite.tags'

    def map(self, html_content: str) -> List[FavouriteTag]:
        soup = self.parse(html_content)
        return (self.mapper.with_document(soup)
                .select_first('table.fav-tags tbody')
                .select('tr')
                .map_to(self._row)
                .or_throw_with_code('table'))

    def _row(self, row: Tag) -> FavouriteTag:
        return (self.mapper.with_element(row)
                .select('td')
                .collect()
                .map_to(lambda cells: self._tag(row, cells))
                .or_throw_with_code('table.row'))

    def _tag(self, row: Tag, cells: List[Tag]) -> FavouriteTag:
        m = self.mapper

        def cell(index):
            return m.with_element(cells[index] if index < len(cells) else None)

        return FavouriteTag(
            id=m.with_element(row).attr('data-tag-id').to_long().or_throw_with_code('table.row.id'),
            name=cell(1).text().or_throw_with_code('table.row.name'),
            lowest_rating=cell(2).text().to_integer().or_throw_with_code('table.row.lowest-rating'),
            highest_rating=cell(3).text().to_integer().or_throw_with_code('table.row.highest-rating'),
            titles_count=cell(4).text().to_integer().or_throw_with_code('table.row.titles-count'),
            average_rating=cell(5).attr('data-sort-value').to_float()
                .or_throw_with_code('table.row.average-rating'),
            weighted_rating=cell(6).attr('data-sort-value').to_float()
                .or_throw_with_code('table.row.weighted-rating'),
            spent_time=cell(7).attr('data-sort-value').to_integer()
                .or_throw_with_code('table.row.spent-time'),
        )
