"""
Site-wide constants shared by the mappers and the HTTP layer.
"""

from utils.pattern_matcher import PatternMatcher

SHINDEN_URL = 'https://shinden.pl'

DATE_FORMAT = '%Y-%m-%d'
DATE_TIME_FORMAT = '%Y-%m-%d %H:%M:%S'

# /user/123-nick -> 123
USER_ID_MATCHER = PatternMatcher.match(r'user/(\d+)', 1)
# /series/12345-title -> series
MEDIA_URL_TYPE_MATCHER = PatternMatcher.match(r'^/([^/]+)/', 1)
# /series/12345-title -> 12345
MEDIA_ID_MATCHER = PatternMatcher.match(r'(?:[^/]*/){2}(\d+)', 1)
# "width: 80%" -> 80
PROGRESS_BAR_MATCHER = PatternMatcher.match(r'width: (\d+)%', 1)
