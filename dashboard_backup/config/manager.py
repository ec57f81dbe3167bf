"""
Configuration management for dashboard backup operations.
"""

import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from ..models.config import BackupConfig
from ..models.exceptions import ConfigurationError


class ConfigurationManager:
    """Manages configuration loading and validation."""
    
    def load_config(self, config_path: Optional[str] = None,
                    overrides: Optional[Dict[str, Any]] = None) -> BackupConfig:
        """
        Load configuration from YAML or JSON file.
        
        Without a file the built-in defaults are used, which point at
        ./accounts_keys.enc, ./private_key.pem and ./dashboards_output.
        
        Args:
            config_path: Optional path to configuration file
            overrides: Flat BackupConfig field values taking precedence
                over the file (None values are ignored)
            
        Returns:
            BackupConfig: Loaded and validated configuration
            
        Raises:
            ConfigurationError: If configuration is invalid or cannot be loaded
        """
        try:
            config_data: Dict[str, Any] = {}
            
            if config_path:
                config_file = Path(config_path)
                
                if not config_file.exists():
                    raise ConfigurationError(f"Configuration file not found: {config_path}")
                
                with open(config_file, 'r', encoding='utf-8') as f:
                    if config_file.suffix.lower() in ['.yaml', '.yml']:
                        config_data = yaml.safe_load(f) or {}
                    elif config_file.suffix.lower() == '.json':
                        config_data = json.load(f)
                    else:
                        raise ConfigurationError(
                            f"Unsupported configuration file format: {config_file.suffix}. "
                            "Supported formats: .yaml, .yml, .json"
                        )
                
                if not isinstance(config_data, dict):
                    raise ConfigurationError("Configuration file must contain a mapping at the top level")
            
            flat_config = self._flatten_config(config_data)
            if overrides:
                flat_config.update({k: v for k, v in overrides.items() if v is not None})
            
            config = BackupConfig(**flat_config)
            self.validate_config(config)
            
            return config
            
        except ConfigurationError:
            raise
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML parsing error: {str(e)}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"JSON parsing error: {str(e)}")
        except TypeError as e:
            raise ConfigurationError(f"Configuration structure error: {str(e)}")
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}")
    
    def _flatten_config(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested configuration dictionary to match BackupConfig fields.
        
        Args:
            config_data: Nested configuration dictionary
            
        Returns:
            Dict[str, Any]: Flattened configuration dictionary
        """
        flat_config = {}
        
        # NerdGraph settings
        nerdgraph_config = config_data.get('nerdgraph') or {}
        flat_config['region'] = nerdgraph_config.get('region')
        flat_config['endpoint'] = nerdgraph_config.get('endpoint')
        
        # File locations
        paths_config = config_data.get('paths') or {}
        flat_config['credentials_path'] = paths_config.get('credentials')
        flat_config['private_key_path'] = paths_config.get('private_key')
        flat_config['output_dir'] = paths_config.get('output_dir')
        
        # Logging settings
        logging_config = config_data.get('logging') or {}
        flat_config['logging_level'] = logging_config.get('level')
        flat_config['logging_file_path'] = logging_config.get('file_path')
        
        # Remove None values
        return {k: v for k, v in flat_config.items() if v is not None}
    
    def validate_config(self, config: BackupConfig) -> bool:
        """
        Validate configuration settings.
        
        Args:
            config: Configuration to validate
            
        Returns:
            bool: True if valid
            
        Raises:
            ConfigurationError: If configuration is invalid
        """
        validation_errors = config.validate()
        if validation_errors:
            raise ConfigurationError(
                f"Configuration validation failed:\n" + 
                "\n".join(f"- {error}" for error in validation_errors)
            )
        return True
    
    def create_sample_config(self, output_path: str) -> None:
        """
        Create a sample configuration file.
        
        Args:
            output_path: Path where to create the sample configuration
        """
        sample_config = {
            'nerdgraph': {
                'region': 'US'  # US or EU; 'endpoint' overrides the region URL
            },
            'paths': {
                'credentials': './accounts_keys.enc',
                'private_key': './private_key.pem',
                'output_dir': './dashboards_output'
            },
            'logging': {
                'level': 'INFO',
                'file_path': './logs/dashboard-backup.log'
            }
        }
        
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        
        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.dump(sample_config, f, default_flow_style=False, indent=2)
