"""
Mapper for the profile edit page (``/user/<id>/edit``).

Reads the values currently filled in on the form, and builds the form data
that submits an update on top of them.
"""

from __future__ import annotations

import logging
from typing import Dict

from shinden.enums import UserGender
from shinden.forms import form_str, merge
from shinden.mappers.base import BaseDocumentMapper
from shinden.models import UserInformation, UserInformationUpdate

logger = logging.getLogger(__name__)

SELECTED = 'option[selected]'


class UserInformationMapper(BaseDocumentMapper):
    mapper_code = 'user.information.edit'

    def type_converters(self):
        return {UserGender: UserGender.from_value}

    def map(self, html_content: str) -> UserInformation:
        document = self.mapper.with_document(self.parse(html_content))
        return UserInformation(
            signature=document.select_first('textarea#signature').text().or_else(),
            about_me=document.select_first('textarea[name=about_me]').text().or_else(),
            gender=document.select_first(f'select#gender > {SELECTED}').attr('value')
                .map_to(UserGender).or_throw_with_code('gender'),
            birth_day=document.select_first(f'select[name=birthdate_day] > {SELECTED}').attr('value')
                .to_integer().or_throw_with_code('birth-day'),
            birth_month=document.select_first(f'select[name=birthdate_month] > {SELECTED}').attr('value')
                .to_integer().or_throw_with_code('birth-month'),
            birth_year=document.select_first(f'select[name=birthdate_year] > {SELECTED}').attr('value')
                .to_integer().or_throw_with_code('birth-year'),
            email=document.select_first('input[name=email]').attr('value').or_throw_with_code('email'),
        )

    def form_data(self, html_content: str, update: UserInformationUpdate) -> Dict[str, str]:
        """Form fields for the edit page with *update* applied to the current values."""
        soup = self.parse(html_content)
        document = self.mapper.with_document(soup)
        current = self.map(html_content)
        accept_nulls = update.accept_null_fields
        birth_date = update.birth_date
        gender = merge(current.gender, update.gender, accept_nulls)
        logger.debug('Building profile form (accept null fields: %s)', accept_nulls)
        return {
            'csrf': document.select_first('form.creator-form > input[name=csrf]').attr('value')
                .or_throw_with_code('csrf'),
            'portal_lang': document.select_first('html').attr('lang').or_throw_with_code('lang'),
            'signature': form_str(merge(current.signature, update.signature, accept_nulls)),
            'about_me': form_str(merge(current.about_me, update.about_me, accept_nulls)),
            'gender': gender.form_value if gender else '',
            'birthdate_day': form_str(merge(current.birth_day, birth_date and birth_date.day, accept_nulls)),
            'birthdate_month': form_str(merge(current.birth_month, birth_date and birth_date.month, accept_nulls)),
            'birthdate_year': form_str(merge(current.birth_year, birth_date and birth_date.year, accept_nulls)),
            'email': form_str(merge(current.email, update.email, accept_nulls)),
        }
