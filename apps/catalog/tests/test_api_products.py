"""
Product image upload and bulk product listing API tests.
"""
from io import BytesIO

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image as PILImage
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Image
from apps.orders.tests.factories import (
    AdminUserFactory,
    ImageFactory,
    ProductFactory,
    SupplierEnterpriseFactory,
    UserFactory,
)


def image_upload(name='logo.png', color='red', size=(80, 60)):
    buffer = BytesIO()
    PILImage.new('RGB', size, color).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


class ProductImageUploadTests(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.owner = UserFactory()
        cls.supplier = SupplierEnterpriseFactory(owner=cls.owner)
        cls.stranger = UserFactory()

    def setUp(self):
        self.product = ProductFactory(supplier=self.supplier)
        self.url = reverse('api:product-images', kwargs={'product_id': self.product.id})

    def test_creates_first_image(self):
        self.client.force_authenticate(self.owner)

        response = self.client.post(self.url, {'file': image_upload()}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            sorted(response.data.keys()),
            ['alt', 'id', 'image_url', 'large_url', 'small_url', 'thumb_url'],
        )
        image = Image.objects.get(pk=response.data['id'])
        self.assertEqual(image.variant, self.product.master)
        self.assertEqual(image.attachment_content_type, 'image/png')
        self.assertEqual((image.attachment_width, image.attachment_height), (80, 60))
        self.assertIsNotNone(response.data['thumb_url'])

    def test_replaces_existing_image(self):
        existing = ImageFactory(variant=self.product.master)
        self.client.force_authenticate(self.owner)

        response = self.client.post(
            self.url, {'file': image_upload('new.png', color='blue')}, format='multipart'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], existing.id)
        existing.refresh_from_db()
        self.assertEqual(existing.attachment_file_name.split('.')[-1], 'png')
        self.assertTrue(existing.attachment.name.split('/')[-1].startswith('new'))
        self.assertEqual(self.product.images.count(), 1)

    def test_replacing_removes_the_old_file(self):
        existing = ImageFactory(variant=self.product.master)
        old_name = existing.attachment.name
        self.assertTrue(default_storage.exists(old_name))
        self.client.force_authenticate(self.owner)

        self.client.post(self.url, {'file': image_upload('new.png')}, format='multipart')

        self.assertFalse(default_storage.exists(old_name))

    def test_rejects_files_that_are_not_images(self):
        self.client.force_authenticate(self.owner)
        upload = SimpleUploadedFile('notes.txt', b'not an image', content_type='text/plain')

        response = self.client.post(self.url, {'file': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertIn('file', response.data['errors'])
        self.assertFalse(self.product.images.exists())

    def test_stranger_is_unauthorized(self):
        self.client.force_authenticate(self.stranger)

        response = self.client.post(self.url, {'file': image_upload()}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(self.product.images.exists())

    def test_unknown_product(self):
        self.client.force_authenticate(AdminUserFactory())

        response = self.client.post(
            reverse('api:product-images', kwargs={'product_id': 999999}),
            {'file': image_upload()},
            format='multipart',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class BulkProductsTests(APITestCase):

    @classmethod
    def setUpTestData(cls):
        cls.owner = UserFactory()
        cls.supplier = SupplierEnterpriseFactory(owner=cls.owner)

    def test_lists_only_managed_products(self):
        mine = ProductFactory(supplier=self.supplier, name='Apples')
        ProductFactory(name='Not mine')
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse('api:bulk-products'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_count'], 1)
        product = response.data['products'][0]
        self.assertEqual(product['id'], mine.id)
        self.assertEqual(product['producer_id'], self.supplier.id)
        self.assertEqual(product['master']['id'], mine.master.id)
        self.assertEqual(len(product['variants']), 1)

    def test_admin_sees_everything(self):
        ProductFactory(supplier=self.supplier)
        ProductFactory()
        self.client.force_authenticate(AdminUserFactory())

        response = self.client.get(reverse('api:bulk-products'), {'per_page': 500})

        self.assertEqual(response.data['total_count'], 2)
        self.assertEqual(response.data['per_page'], 500)

    def test_filters_by_name(self):
        ProductFactory(supplier=self.supplier, name='Carrots')
        ProductFactory(supplier=self.supplier, name='Beetroot')
        self.client.force_authenticate(self.owner)

        response = self.client.get(
            reverse('api:bulk-products'), {'q[name_cont]': 'carr'}
        )

        self.assertEqual(
            [p['name'] for p in response.data['products']], ['Carrots']
        )

    def test_includes_image_urls(self):
        product = ProductFactory(supplier=self.supplier)
        ImageFactory(variant=product.master)
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse('api:bulk-products'))

        payload = response.data['products'][0]
        self.assertIsNotNone(payload['image_url'])
        self.assertIsNotNone(payload['thumb_url'])
