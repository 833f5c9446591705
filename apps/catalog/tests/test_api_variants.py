"""
Variants API tests using DRF's APITestCase.
"""
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.api.exceptions import UNAUTHORIZED_MESSAGE
from apps.catalog.models import Variant
from apps.catalog.services.variant_deleter import ONLY_VARIANT_MESSAGE
from apps.orders.tests.factories import (
    AdminUserFactory,
    EnterpriseRoleFactory,
    OptionValueFactory,
    ProductFactory,
    SupplierEnterpriseFactory,
    UserFactory,
    VariantFactory,
)

STANDARD_ATTRIBUTES = [
    'id', 'name', 'sku', 'price', 'weight', 'height', 'width', 'depth',
    'is_master', 'cost_price', 'permalink',
]


class VariantReadTests(APITestCase):
    """Any signed in user can read variants."""

    @classmethod
    def setUpTestData(cls):
        cls.user = UserFactory()
        cls.product = ProductFactory(name='Tomato')
        cls.variant = cls.product.variants.get()
        cls.option_value = OptionValueFactory(presentation='Large')
        cls.variant.option_values.add(cls.option_value)

    def setUp(self):
        self.client.force_authenticate(self.user)

    def test_anonymous_users_are_rejected(self):
        self.client.force_authenticate(None)

        response = self.client.get(reverse('api:variant-list'))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_index_is_paginated(self):
        response = self.client.get(reverse('api:variant-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        for key in ('count', 'total_count', 'current_page', 'pages', 'per_page', 'variants'):
            self.assertIn(key, response.data)
        self.assertEqual(response.data['current_page'], 1)
        # master and standard variant
        self.assertEqual(response.data['total_count'], 2)

    def test_index_respects_per_page(self):
        VariantFactory(product=self.product)

        response = self.client.get(
            reverse('api:variant-list'), {'per_page': 1, 'page': 2}
        )

        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['per_page'], 1)
        self.assertEqual(response.data['pages'], 3)
        self.assertEqual(response.data['current_page'], 2)

    def test_nested_index_by_id_and_permalink(self):
        ProductFactory()

        by_id = self.client.get(
            reverse('api:product-variant-list', kwargs={'product_id': self.product.id})
        )
        by_permalink = self.client.get(
            reverse('api:product-variant-list', kwargs={'product_id': 'tomato'})
        )

        self.assertEqual(by_id.data['total_count'], 2)
        self.assertEqual(
            [v['id'] for v in by_id.data['variants']],
            [v['id'] for v in by_permalink.data['variants']],
        )

    def test_unknown_product_is_not_found(self):
        response = self.client.get(
            reverse('api:product-variant-list', kwargs={'product_id': 'no-such-thing'})
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_ransack_filtering(self):
        VariantFactory(product=self.product, sku='FINDME-1')

        response = self.client.get(
            reverse('api:variant-list'), {'q[sku_cont]': 'findme'}
        )

        self.assertEqual(response.data['total_count'], 1)
        self.assertEqual(response.data['variants'][0]['sku'], 'FINDME-1')

    def test_option_value_filter_lists_each_variant_once(self):
        self.variant.option_values.add(OptionValueFactory(presentation='Large box'))

        response = self.client.get(
            reverse('api:variant-list'),
            {'q[option_values_presentation_cont]': 'large'},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [v['id'] for v in response.data['variants']], [self.variant.id]
        )
        self.assertEqual(response.data['total_count'], 1)

    def test_unknown_conditions_are_ignored(self):
        response = self.client.get(
            reverse('api:variant-list'), {'q[colour_cont]': 'red'}
        )

        self.assertEqual(response.data['total_count'], 2)

    def test_in_condition_accepts_array_params(self):
        response = self.client.get(
            reverse('api:variant-list'),
            {'q[id_in][]': [self.variant.id, self.product.master.id]},
        )

        self.assertEqual(response.data['total_count'], 2)

    def test_sorting_by_product_name(self):
        ProductFactory(name='Apple')

        response = self.client.get(
            reverse('api:variant-list'), {'q[s]': 'product_name asc'}
        )

        self.assertEqual(response.data['variants'][0]['name'], 'Apple')

    def test_ransack_sorting(self):
        VariantFactory(product=self.product, price=Decimal('99.00'))

        response = self.client.get(
            reverse('api:variant-list'), {'q[s]': 'price desc'}
        )

        self.assertEqual(response.data['variants'][0]['price'], '99.00')

    def test_ransack_rejects_bad_values(self):
        response = self.client.get(
            reverse('api:variant-list'), {'q[price_gt]': 'cheap'}
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bulk_index_template(self):
        response = self.client.get(
            reverse('api:variant-list'), {'template': 'bulk_index'}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsInstance(response.data, list)
        row = response.data[0]
        for key in ('id', 'options_text', 'price', 'on_hand', 'unit_value',
                    'unit_description', 'on_demand', 'display_as', 'display_name'):
            self.assertIn(key, row)

    def test_show(self):
        response = self.client.get(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk})
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        for key in STANDARD_ATTRIBUTES:
            self.assertIn(key, response.data)
        self.assertEqual(response.data['name'], 'Tomato')
        self.assertEqual(response.data['permalink'], 'tomato')
        self.assertEqual(response.data['options_text'], self.variant.options_text)
        option_value = response.data['option_values'][0]
        self.assertEqual(
            list(option_value.keys()),
            ['id', 'name', 'presentation', 'option_type_name', 'option_type_id'],
        )
        self.assertEqual(option_value['presentation'], 'Large')
        self.assertEqual(response.data['images'], [])

    def test_new(self):
        response = self.client.get(reverse('api:variant-new'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['attributes'], STANDARD_ATTRIBUTES)
        self.assertEqual(response.data['required_attributes'], [])

    def test_deleted_variants_hidden(self):
        extra = VariantFactory(product=self.product)
        extra.soft_delete()

        response = self.client.get(reverse('api:variant-list'), {'show_deleted': '1'})

        ids = [v['id'] for v in response.data['variants']]
        self.assertNotIn(extra.id, ids)

    def test_admin_can_see_deleted_variants(self):
        extra = VariantFactory(product=self.product)
        extra.soft_delete()
        self.client.force_authenticate(AdminUserFactory())

        hidden = self.client.get(reverse('api:variant-list'))
        shown = self.client.get(reverse('api:variant-list'), {'show_deleted': '1'})

        self.assertNotIn(extra.id, [v['id'] for v in hidden.data['variants']])
        self.assertIn(extra.id, [v['id'] for v in shown.data['variants']])


class VariantWriteTests(APITestCase):
    """Only admins and managers of the supplier can change variants."""

    @classmethod
    def setUpTestData(cls):
        cls.manager = UserFactory()
        cls.supplier = SupplierEnterpriseFactory()
        EnterpriseRoleFactory(user=cls.manager, enterprise=cls.supplier)
        cls.stranger = UserFactory()
        cls.admin = AdminUserFactory()

    def setUp(self):
        self.product = ProductFactory(supplier=self.supplier)
        self.variant = self.product.variants.get()

    def assertUnauthorized(self, response):
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': UNAUTHORIZED_MESSAGE})

    def test_stranger_cannot_create(self):
        self.client.force_authenticate(self.stranger)

        response = self.client.post(
            reverse('api:product-variant-list', kwargs={'product_id': self.product.id}),
            {'variant': {'sku': '12345', 'unit_value': 2}},
            format='json',
        )

        self.assertUnauthorized(response)
        self.assertEqual(self.product.variants.count(), 1)

    def test_stranger_cannot_update(self):
        self.client.force_authenticate(self.stranger)

        response = self.client.put(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk}),
            {'variant': {'sku': '12345'}},
            format='json',
        )

        self.assertUnauthorized(response)

    def test_stranger_cannot_delete(self):
        VariantFactory(product=self.product)
        self.client.force_authenticate(self.stranger)

        response = self.client.delete(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk})
        )

        self.assertUnauthorized(response)
        self.assertTrue(Variant.objects.filter(pk=self.variant.pk).exists())

    def test_manager_can_create(self):
        self.client.force_authenticate(self.manager)

        response = self.client.post(
            reverse('api:product-variant-list', kwargs={'product_id': self.product.id}),
            {'variant': {'sku': '12345', 'unit_value': 2, 'unit_description': 'L'}},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['sku'], '12345')
        self.assertFalse(response.data['is_master'])
        self.assertEqual(self.product.variants.count(), 2)

    def test_create_validates_unit_value(self):
        self.client.force_authenticate(self.manager)

        response = self.client.post(
            reverse('api:product-variant-list', kwargs={'product_id': self.product.id}),
            {'sku': 'NO-UNIT'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('unit_value', response.data)

    def test_create_without_product_is_not_found(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse('api:variant-list'), {'sku': 'ORPHAN'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_can_update(self):
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk}),
            {'variant': {'sku': '12345', 'price': '3.10'}},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.sku, '12345')
        self.assertEqual(self.variant.price, Decimal('3.10'))

    def test_update_assigns_option_values(self):
        option_value = OptionValueFactory()
        self.client.force_authenticate(self.manager)

        response = self.client.patch(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk}),
            {'option_value_ids': [option_value.pk]},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [ov['id'] for ov in response.data['option_values']], [option_value.pk]
        )

    def test_destroy_soft_deletes(self):
        VariantFactory(product=self.product)
        self.client.force_authenticate(self.manager)

        response = self.client.delete(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk})
        )

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Variant.objects.filter(pk=self.variant.pk).exists())
        self.assertIsNotNone(Variant.all_objects.get(pk=self.variant.pk).deleted_at)

        again = self.client.get(
            reverse('api:variant-detail', kwargs={'pk': self.variant.pk})
        )
        self.assertEqual(again.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_can_delete_master(self):
        master = self.product.master
        self.client.force_authenticate(self.admin)

        response = self.client.delete(
            reverse('api:variant-detail', kwargs={'pk': master.pk})
        )

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class VariantSoftDeleteTests(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.owner = UserFactory()
        cls.supplier = SupplierEnterpriseFactory(owner=cls.owner)
        cls.stranger = UserFactory()

    def setUp(self):
        self.product = ProductFactory(supplier=self.supplier)
        self.variant = self.product.variants.get()

    def soft_delete_url(self, variant):
        return reverse(
            'api:product-variant-soft-delete',
            kwargs={'product_id': self.product.id, 'pk': variant.pk},
        )

    def test_soft_deletes_when_siblings_remain(self):
        VariantFactory(product=self.product)
        self.client.force_authenticate(self.owner)

        response = self.client.delete(self.soft_delete_url(self.variant))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.variant.refresh_from_db()
        self.assertIsNotNone(self.variant.deleted_at)

    def test_refuses_last_variant(self):
        self.client.force_authenticate(self.owner)

        response = self.client.delete(self.soft_delete_url(self.variant))

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertEqual(
            response.data, {'errors': {'product': [ONLY_VARIANT_MESSAGE]}}
        )
        self.variant.refresh_from_db()
        self.assertIsNone(self.variant.deleted_at)

    def test_stranger_is_unauthorized(self):
        VariantFactory(product=self.product)
        self.client.force_authenticate(self.stranger)

        response = self.client.delete(self.soft_delete_url(self.variant))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.variant.refresh_from_db()
        self.assertIsNone(self.variant.deleted_at)
