# -*- coding: utf-8 -*-
"""
Tests para SyncService
Verifica el flujo Transform -> API -> Resultados y el aislamiento de fallos por lote
"""

import json

import pytest
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from demo_connector.models import (
    DeleteSucceeded, DemoImage, DemoOption, DemoProduct, Failed, Success,
)
from demo_connector.log.writer import Writer
from demo_connector.services.api_client import APIClientError, DemoAPI
from demo_connector.services.sync_logger import SyncLogger
from demo_connector.services.sync_service import INVALID_TRANSFORM, SyncService
from demo_connector.tests.factories import make_channel, make_channel_product

SYNC_TIME = datetime(2026, 1, 5, 14, 0, tzinfo=timezone.utc)


def demo_response(*ids):
    return [
        DemoProduct(id=pid, name=f"Product {pid}", options=[DemoOption(id=f"{pid}-o", sku=f"SKU-{n:03d}")])
        for n, pid in enumerate(ids, start=1)
    ]


class TestSyncUpsert:
    """Test suite para sync_upsert"""

    def setup_method(self):
        self.api = Mock(spec=DemoAPI)
        self.logger = Mock(spec=SyncLogger)
        self.service = SyncService(api=self.api, logger=self.logger, clock=lambda: SYNC_TIME)
        self.channel = make_channel()
        self.products = [make_channel_product(1), make_channel_product(2)]

    def test_empty_batch_is_noop(self):
        """Test: Lote vacío no transforma, no llama a la API y no registra logs"""
        with patch('demo_connector.services.sync_service.try_demo_products') as mock_transform:
            self.service.sync_upsert([], self.channel)

        mock_transform.assert_not_called()
        self.api.post_products.assert_not_called()
        self.logger.log_product_sync_failed.assert_not_called()

    def test_success_positional_mapping(self):
        """Test: Cada producto recibe el ID devuelto en su misma posición"""
        self.api.post_products.return_value = demo_response('A1', 'A2')

        self.service.sync_upsert(self.products, self.channel)

        assert self.products[0].outcome == Success(channel_product_code='A1')
        assert self.products[1].outcome == Success(channel_product_code='A2')
        assert self.products[0].channel_product_code == 'A1'
        assert self.products[1].channel_product_code == 'A2'
        assert all(p.success is True for p in self.products)
        assert all(p.synced == SYNC_TIME.isoformat() for p in self.products)
        self.logger.log_product_sync_failed.assert_not_called()

    def test_success_sends_transformed_payload(self):
        """Test: La API recibe un DemoProduct por producto, en orden"""
        self.api.post_products.return_value = demo_response('A1', 'A2')

        self.service.sync_upsert(self.products, self.channel)

        sent = self.api.post_products.call_args[0][0]
        assert [p.name for p in sent] == ['Product', 'Product']
        assert [p.options[0].sku for p in sent] == ['SKU-001', 'SKU-002']
        assert all(p.id == '' for p in sent)

    def test_transform_failure_marks_all_failed(self):
        """Test: Un producto inválido marca todo el lote como 'Invalid Transform'"""
        self.products.append(make_channel_product(3, title=''))

        self.service.sync_upsert(self.products, self.channel)

        assert all(p.outcome == Failed(reason=INVALID_TRANSFORM) for p in self.products)
        assert all(p.success is False for p in self.products)
        self.api.post_products.assert_not_called()
        self.logger.log_product_sync_failed.assert_called_once_with(
            self.products, INVALID_TRANSFORM, self.channel
        )

    def test_malformed_record_marks_all_failed(self):
        """Test: Un registro mal formado invalida el lote sin propagar la excepción"""
        self.products[1].variants.append(None)

        self.service.sync_upsert(self.products, self.channel)

        assert all(p.outcome == Failed(reason=INVALID_TRANSFORM) for p in self.products)
        self.api.post_products.assert_not_called()
        self.logger.log_product_sync_failed.assert_called_once_with(
            self.products, INVALID_TRANSFORM, self.channel
        )

    def test_remote_failure_marks_all_failed(self):
        """Test: Error de la API marca todo el lote con el mensaje original"""
        self.api.post_products.side_effect = APIClientError('connection refused')

        self.service.sync_upsert(self.products, self.channel)

        assert all(p.outcome == Failed(reason='connection refused') for p in self.products)
        assert all(p.channel_product_code is None for p in self.products)
        self.logger.log_product_sync_failed.assert_called_once_with(
            self.products, 'connection refused', self.channel
        )

    def test_response_count_mismatch_is_remote_failure(self):
        """Test: Respuesta con distinto número de productos no se asocia"""
        self.api.post_products.return_value = demo_response('A1')

        self.service.sync_upsert(self.products, self.channel)

        expected = Failed(reason='Invalid response: expected 2 products, got 1')
        assert all(p.outcome == expected for p in self.products)
        assert all(p.channel_product_code is None for p in self.products)
        self.logger.log_product_sync_failed.assert_called_once()

    def test_new_attempt_overwrites_outcome(self):
        """Test: Un nuevo intento reemplaza el resultado anterior"""
        self.api.post_products.side_effect = APIClientError('timeout')
        self.service.sync_upsert(self.products, self.channel)

        self.api.post_products.side_effect = None
        self.api.post_products.return_value = demo_response('A1', 'A2')
        self.service.sync_upsert(self.products, self.channel)

        assert [p.outcome for p in self.products] == [
            Success(channel_product_code='A1'),
            Success(channel_product_code='A2'),
        ]

    def test_unexpected_errors_propagate(self):
        """Test: Solo se capturan errores de la API; otros errores se propagan"""
        self.api.post_products.side_effect = RuntimeError('bug')

        with pytest.raises(RuntimeError):
            self.service.sync_upsert(self.products, self.channel)

    def test_none_arguments_rejected(self):
        """Test: Argumentos None son un error de programación"""
        with pytest.raises(ValueError):
            self.service.sync_upsert(None, self.channel)

        with pytest.raises(ValueError):
            self.service.sync_upsert(self.products, None)


class TestSyncDelete:
    """Test suite para sync_delete"""

    def setup_method(self):
        self.api = Mock(spec=DemoAPI)
        self.logger = Mock(spec=SyncLogger)
        self.service = SyncService(api=self.api, logger=self.logger, clock=lambda: SYNC_TIME)
        self.channel = make_channel()
        self.products = [
            make_channel_product(1, channel_product_code='A1'),
            make_channel_product(2, channel_product_code='A2'),
        ]

    def test_empty_batch_is_noop(self):
        """Test: Lote vacío no llama a la API"""
        with patch('demo_connector.services.sync_service.try_demo_product_ids') as mock_transform:
            self.service.sync_delete([], self.channel)

        mock_transform.assert_not_called()
        self.api.delete_products.assert_not_called()
        self.logger.log_product_sync_failed.assert_not_called()

    def test_delete_success(self):
        """Test: Eliminación exitosa marca todo el lote como eliminado"""
        self.service.sync_delete(self.products, self.channel)

        self.api.delete_products.assert_called_once_with(['A1', 'A2'])
        assert all(p.outcome == DeleteSucceeded() for p in self.products)
        assert all(p.success is True for p in self.products)
        self.logger.log_product_sync_failed.assert_not_called()

    def test_missing_code_is_invalid_transform(self):
        """Test: Producto sin channel_product_code invalida el lote"""
        self.products.append(make_channel_product(3))

        self.service.sync_delete(self.products, self.channel)

        assert all(p.outcome == Failed(reason=INVALID_TRANSFORM) for p in self.products)
        self.api.delete_products.assert_not_called()
        self.logger.log_product_sync_failed.assert_called_once_with(
            self.products, INVALID_TRANSFORM, self.channel
        )

    def test_remote_failure_marks_all_failed(self):
        """Test: Error de la API al eliminar marca todo el lote como fallido"""
        self.api.delete_products.side_effect = APIClientError('Client error: 400 - "bad request"')

        self.service.sync_delete(self.products, self.channel)

        assert all(p.outcome == Failed(reason='Client error: 400 - "bad request"') for p in self.products)
        self.logger.log_product_sync_failed.assert_called_once()


class TestSyncServiceWithWriter:
    """Tests del servicio con el logger real escribiendo a archivo"""

    def test_remote_failure_writes_one_log_line(self, tmp_path):
        """Test: Un fallo de lote produce exactamente una línea de log con el mensaje"""
        log_file = tmp_path / 'system.log'
        api = Mock(spec=DemoAPI)
        api.post_products.side_effect = APIClientError('connection refused')
        service = SyncService(api=api, logger=SyncLogger(Writer(path=str(log_file))))
        channel = make_channel(client_id=21)

        service.sync_upsert([make_channel_product(1), make_channel_product(2)], channel)

        lines = log_file.read_text().splitlines()
        assert len(lines) == 1
        event = json.loads(lines[0])
        assert event['message'] == 'connection refused'
        assert event['level'] == 'error'
        assert event['client_id'] == 21
        assert event['context']['channel_id'] == '7'
        assert event['context']['channel_product_ids'] == '1,2'
        assert 'datetime' in event


class TestSyncServiceForChannel:

    def test_for_channel_uses_api_url(self):
        """Test: for_channel crea el cliente con la api_url del canal"""
        service = SyncService.for_channel(make_channel(api_url='http://store:8080/'))

        assert service.api.base_url == 'http://store:8080'

    def test_for_channel_without_api_url(self):
        """Test: Canal sin api_url es un error de configuración"""
        with pytest.raises(ValueError):
            SyncService.for_channel(make_channel(api_url=None))


class TestSuccessCodes:

    def test_variant_and_image_codes_recorded(self):
        """Test: Las opciones e imágenes devueltas actualizan los códigos por SKU y URL"""
        api = Mock(spec=DemoAPI)
        api.post_products.return_value = [
            DemoProduct(
                id='P1',
                name='Laptop',
                options=[DemoOption(id='O1', sku='SKU-001')],
                images=[DemoImage(id='I1', url='http://img/1.png')],
            )
        ]
        product = make_channel_product(1, images=['http://img/1.png'])
        service = SyncService(api=api, logger=Mock(spec=SyncLogger))

        service.sync_upsert([product], make_channel())

        assert product.variants[0].channel_variant_code == 'O1'
        assert product.images[0].channel_image_code == 'I1'


class TestSyncWithFixtures:
    """Flujo completo usando los fixtures compartidos"""

    def test_upsert_then_delete(self, channel, channel_products):
        """Test: Un lote creado puede eliminarse con los códigos asignados"""
        api = Mock(spec=DemoAPI)
        api.post_products.return_value = [
            DemoProduct(id='P1', name='Laptop Dell XPS 13', options=[DemoOption(id='O1', sku='DELL-XPS13-001')]),
            DemoProduct(id='P2', name='Mouse Logitech MX Master 3', options=[DemoOption(id='O2', sku='LOG-MX3-002')]),
        ]
        service = SyncService(api=api, logger=Mock(spec=SyncLogger), clock=lambda: SYNC_TIME)

        service.sync_upsert(channel_products, channel)
        service.sync_delete(channel_products, channel)

        api.delete_products.assert_called_once_with(['P1', 'P2'])
        assert [p.variants[0].channel_variant_code for p in channel_products] == ['O1', 'O2']
        assert all(p.outcome == DeleteSucceeded() for p in channel_products)

    def test_malformed_record_writes_one_log_line(self, channel, channel_products, tmp_path):
        """Test: Un registro mal formado produce una sola línea de log 'Invalid Transform'"""
        log_file = tmp_path / 'system.log'
        api = Mock(spec=DemoAPI)
        service = SyncService(api=api, logger=SyncLogger(Writer(path=str(log_file))))
        channel_products[0].images.append(None)

        service.sync_upsert(channel_products, channel)

        lines = log_file.read_text().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])['message'] == INVALID_TRANSFORM
        assert all(p.outcome == Failed(reason=INVALID_TRANSFORM) for p in channel_products)
        api.post_products.assert_not_called()
