import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from ina219_helper import TransportError
from ina219_telemetry.Monitor import Monitor
from ina219_telemetry.PowerTelemetry import PowerState
from ina219_telemetry.apps import read_ina


class TestReadIna(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_parse_args_defaults(self):
        args = read_ina.parse_args([])

        assert args.config == "ina219.toml"
        assert args.bus is None
        assert args.address is None
        assert args.count == 0

    def test_parse_args_hex_address(self):
        args = read_ina.parse_args(["--address", "0x40", "--bus", "0", "--count", "3"])

        assert args.address == 0x40
        assert args.bus == 0
        assert args.count == 3

    def test_invalid_log_level(self):
        with self.assertRaises(ValueError):
            read_ina.configure_logging("LOUD")

    def test_format_state(self):
        text = read_ina.format_state(PowerState(psu_voltage=7.232, percentage=50.0))

        assert "PSU Voltage:   7.232 V" in text
        assert "Percentage:    50.0 %" in text

    @patch('ina219_telemetry.apps.read_ina.time.sleep')
    def test_run_counts_failures(self, mock_sleep):
        telemetry = MagicMock()
        telemetry.get_state.return_value = PowerState()
        telemetry.update.side_effect = [None, TransportError("bus gone"), None]
        monitor = Monitor(telemetry, 5.0)

        with redirect_stdout(io.StringIO()) as out:
            failures = read_ina.run(monitor, count=3)

        assert failures == 1
        assert monitor.get_failures() == 0
        assert telemetry.update.call_count == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(5.0)
        assert out.getvalue().count("Load Voltage") == 2

    @patch('ina219_telemetry.apps.read_ina.configure_logging')
    @patch('ina219_telemetry.apps.read_ina.time.sleep')
    @patch('ina219_telemetry.Transport.SMBus')
    def test_main_uses_command_line_overrides(self, mock_smbus_class, mock_sleep, mock_logging):
        mock_bus = MagicMock()
        mock_bus.read_i2c_block_data.return_value = [0x0F, 0xA8]
        mock_smbus_class.return_value = mock_bus

        with redirect_stdout(io.StringIO()):
            result = read_ina.main([
                "--config", "/nonexistent/ina219.toml",
                "--bus", "3",
                "--address", "0x41",
                "--count", "1",
            ])

        assert result == 0
        mock_smbus_class.assert_called_once_with(3)
        mock_logging.assert_called_once_with("INFO")
        assert mock_bus.read_i2c_block_data.call_args_list[0][0][0] == 0x41
        mock_bus.close.assert_called_once()

    @patch('ina219_telemetry.apps.read_ina.configure_logging')
    @patch('ina219_telemetry.Transport.SMBus')
    def test_main_rejects_zero_battery_window(self, mock_smbus_class, mock_logging):
        mock_bus = MagicMock()
        mock_smbus_class.return_value = mock_bus
        config = Path(self.tmpdir.name) / "ina219.toml"
        config.write_text("[battery]\nempty_voltage = 7.0\nfull_voltage = 7.0\n")

        result = read_ina.main(["--config", str(config), "--count", "1"])

        assert result == 1
        mock_bus.read_i2c_block_data.assert_not_called()
        mock_bus.close.assert_called_once()

    @patch('ina219_telemetry.apps.read_ina.configure_logging')
    @patch('ina219_telemetry.Transport.SMBus')
    def test_main_closes_bus_on_failed_initialization(self, mock_smbus_class, mock_logging):
        mock_bus = MagicMock()
        mock_bus.write_i2c_block_data.side_effect = OSError(121, "Remote I/O error")
        mock_smbus_class.return_value = mock_bus

        result = read_ina.main(["--config", "/nonexistent/ina219.toml", "--count", "1"])

        assert result == 1
        mock_bus.close.assert_called_once()

    @patch('ina219_telemetry.apps.read_ina.configure_logging')
    @patch('ina219_telemetry.Transport.SMBus')
    def test_main_reports_failed_initialization(self, mock_smbus_class, mock_logging):
        mock_bus = MagicMock()
        mock_bus.write_i2c_block_data.side_effect = OSError(121, "Remote I/O error")
        mock_smbus_class.return_value = mock_bus

        result = read_ina.main(["--config", "/nonexistent/ina219.toml", "--count", "1"])

        assert result == 1


if __name__ == '__main__':
    unittest.main()
