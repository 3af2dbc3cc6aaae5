from errors import ValidationError

# Keys understood by the client's icon and color pickers
ICON_OPTIONS = (
    'droplet',
    'dumbbell',
    'book-open',
    'coffee',
    'heart',
    'music',
    'pen-tool',
    'smartphone',
    'sun',
    'zap',
)

COLOR_OPTIONS = (
    ('Blue', 'blue'),
    ('Green', 'green'),
    ('Purple', 'purple'),
    ('Red', 'red'),
    ('Yellow', 'yellow'),
    ('Pink', 'pink'),
    ('Orange', 'orange'),
    ('Teal', 'teal'),
)

COLOR_VALUES = tuple(value for _, value in COLOR_OPTIONS)

DEFAULT_HABITS = (
    ('Drink Water', 'droplet', 'blue'),
    ('Exercise', 'dumbbell', 'green'),
    ('Read', 'book-open', 'purple'),
)

def check_icon(icon):
    if icon and icon not in ICON_OPTIONS:
        raise ValidationError(f"Unknown icon '{icon}'")
    return icon

def check_color(color):
    if color and color not in COLOR_VALUES:
        raise ValidationError(f"Unknown color '{color}'")
    return color

def catalog_dict():
    return {
        'icons': list(ICON_OPTIONS),
        'colors': [{'name': name, 'value': value} for name, value in COLOR_OPTIONS],
    }
