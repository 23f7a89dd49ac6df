import os


class Paths:
    '''Centralized path configurations for bundled and local assets'''
    PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    # Bundled paths
    COMPOSER = os.path.join(PACKAGE_ROOT, 'composer')
    DEFAULT_LAMBDA_ASSET_PATH = os.path.join(COMPOSER, 'laravel58-bref')

    def __init__(self, app_config: dict):
        # Local paths
        self.LOCAL_LARAVEL = app_config.get('laravel_path') or self.DEFAULT_LAMBDA_ASSET_PATH
