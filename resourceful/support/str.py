"""
String Helper Functions
Laravel-style string manipulation and inflection utilities
"""
import re
from typing import Any, Mapping


class Str:
    """
    String manipulation helper class (Laravel-style)

    Provides static methods for the string operations used by resource routing:
    - snake_case / StudlyCase conversion
    - pluralization and singularization
    - table-style resource names
    - {placeholder} interpolation
    """

    IRREGULARS = {
        'person': 'people',
        'child': 'children',
        'man': 'men',
        'woman': 'women',
        'tooth': 'teeth',
        'foot': 'feet',
        'mouse': 'mice',
        'goose': 'geese',
        'ox': 'oxen',
        'medium': 'media',
        'analysis': 'analyses',
        'crisis': 'crises',
        'thesis': 'theses',
    }

    UNCOUNTABLE = {
        'equipment', 'information', 'rice', 'money', 'species',
        'series', 'fish', 'sheep', 'jeans', 'police', 'data',
        'feedback', 'metadata', 'news',
    }

    PLURAL_RULES = [
        (r'(quiz)$', r'\1zes'),
        (r'^(ox)$', r'\1en'),
        (r'(m|l)ouse$', r'\1ice'),
        (r'(matr|vert|append)ix$', r'\1ices'),
        (r'(x|ch|ss|sh)$', r'\1es'),
        (r'([^aeiouy]|qu)y$', r'\1ies'),
        (r'(hive)$', r'\1s'),
        (r'([^f])fe$', r'\1ves'),
        (r'([lr])f$', r'\1ves'),
        (r'sis$', 'ses'),
        (r'([ti])um$', r'\1a'),
        (r'(buffal|tomat|volcan)o$', r'\1oes'),
        (r'(bu)s$', r'\1ses'),
        (r'(alias|status)$', r'\1es'),
        (r'(octop|vir)us$', r'\1i'),
        (r'(ax|test)is$', r'\1es'),
        (r's$', 's'),
    ]

    SINGULAR_RULES = [
        (r'(database)s$', r'\1'),
        (r'(quiz)zes$', r'\1'),
        (r'(matr)ices$', r'\1ix'),
        (r'(vert|append)ices$', r'\1ix'),
        (r'^(ox)en$', r'\1'),
        (r'(alias|status)es$', r'\1'),
        (r'(octop|vir)i$', r'\1us'),
        (r'(cris|ax|test)es$', r'\1is'),
        (r'(shoe)s$', r'\1'),
        (r'(o)es$', r'\1'),
        (r'(bus)es$', r'\1'),
        (r'(m|l)ice$', r'\1ouse'),
        (r'(x|ch|ss|sh)es$', r'\1'),
        (r'(m)ovies$', r'\1ovie'),
        (r'([^aeiouy]|qu)ies$', r'\1y'),
        (r'([lr])ves$', r'\1f'),
        (r'(tive)s$', r'\1'),
        (r'(hive)s$', r'\1'),
        (r'([^f])ves$', r'\1fe'),
        (r'([ti])a$', r'\1um'),
        (r'(ss)$', r'\1'),
        (r's$', ''),
    ]

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """
        Convert a string to snake_case

        Args:
            value: String to convert
            delimiter: Delimiter to use (default: '_')

        Returns:
            Snake cased string

        Example:
            Str.snake('BlogPost')  # 'blog_post'
            Str.snake('Blog Post')  # 'blog_post'
            Str.snake('blog-post')  # 'blog_post'
        """
        if not value:
            return value

        value = value.replace(' ', delimiter).replace('-', delimiter)

        # Insert delimiter before uppercase letters
        value = re.sub('(.)([A-Z][a-z]+)', r'\1' + delimiter + r'\2', value)
        value = re.sub('([a-z0-9])([A-Z])', r'\1' + delimiter + r'\2', value)

        # Lowercase and remove duplicate delimiters
        value = value.lower()
        value = re.sub(f'{re.escape(delimiter)}+', delimiter, value)

        return value.strip(delimiter)

    @staticmethod
    def studly(value: str) -> str:
        """
        Convert a string to StudlyCase (PascalCase)

        Example:
            Str.studly('blog_posts')  # 'BlogPosts'
        """
        if not value:
            return value

        value = value.replace('_', ' ').replace('-', ' ')
        return ''.join(word.capitalize() for word in value.split())

    @classmethod
    def pluralize(cls, word: str) -> str:
        """
        Pluralize a word using Rails-like inflection rules

        Example:
            Str.pluralize('post')  # 'posts'
            Str.pluralize('category')  # 'categories'
            Str.pluralize('person')  # 'people'
        """
        if not word:
            return word

        lower = word.lower()
        if lower in cls.UNCOUNTABLE or lower in cls.IRREGULARS.values():
            return word
        if lower in cls.IRREGULARS:
            return cls.IRREGULARS[lower]

        for pattern, replacement in cls.PLURAL_RULES:
            result, count = re.subn(pattern, replacement, word, flags=re.IGNORECASE)
            if count > 0:
                return result

        return word + 's'

    @classmethod
    def singularize(cls, word: str) -> str:
        """
        Singularize a word using Rails-like inflection rules

        Example:
            Str.singularize('posts')  # 'post'
            Str.singularize('categories')  # 'category'
        """
        if not word:
            return word

        lower = word.lower()
        if lower in cls.UNCOUNTABLE:
            return word
        for singular, plural in cls.IRREGULARS.items():
            if lower == plural:
                return singular

        for pattern, replacement in cls.SINGULAR_RULES:
            result, count = re.subn(pattern, replacement, word, flags=re.IGNORECASE)
            if count > 0:
                return result

        return word

    @classmethod
    def tableize(cls, value: str) -> str:
        """
        Convert a class-like or human name to its plural, lower-cased table form

        Only the last word is pluralized, so the result is path safe.

        Example:
            Str.tableize('Post')  # 'posts'
            Str.tableize('BlogPost')  # 'blog_posts'
            Str.tableize('posts')  # 'posts'
        """
        if not value:
            return value

        words = cls.snake(value).split('_')
        words[-1] = cls.pluralize(words[-1])
        return '_'.join(words)

    @staticmethod
    def insert(template: str, data: Mapping[str, Any]) -> str:
        """
        Replace {key} placeholders with values from data

        Placeholders with no matching key are left untouched so that
        router-native parameters survive interpolation.

        Example:
            Str.insert('/{resource}/{id}', {'resource': 'posts'})  # '/posts/{id}'
        """
        if not template:
            return template

        def replace(match):
            key = match.group(1)
            if key in data:
                return str(data[key])
            return match.group(0)

        return re.sub(r'\{(\w+)}', replace, template)

