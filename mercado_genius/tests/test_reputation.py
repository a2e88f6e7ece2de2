from mercado_genius.models import ReputationStatus
from mercado_genius.services import compute_reputation, format_rating


def test_no_reviews_is_neutral_zero():
    result = compute_reputation([])
    assert result.rating == 0
    assert result.count == 0
    assert result.status is ReputationStatus.NEUTRAL


def test_excellent_needs_three_reviews():
    assert compute_reputation([5, 5, 5]).status is ReputationStatus.EXCELLENT
    assert compute_reputation([5, 5, 4]).status is ReputationStatus.EXCELLENT
    # promedio 5 pero solo dos reseñas
    assert compute_reputation([5, 5]).status is ReputationStatus.GOOD


def test_good_neutral_and_scam_alert():
    assert compute_reputation([4, 4]).status is ReputationStatus.GOOD
    assert compute_reputation([4, 3]).status is ReputationStatus.GOOD
    assert compute_reputation([3, 3]).status is ReputationStatus.NEUTRAL
    assert compute_reputation([2]).status is ReputationStatus.NEUTRAL
    assert compute_reputation([1, 1]).status is ReputationStatus.SCAM_ALERT
    assert compute_reputation([1, 2]).status is ReputationStatus.SCAM_ALERT


def test_out_of_range_ratings_fall_to_poor():
    assert compute_reputation([0, 0]).status is ReputationStatus.POOR


def test_format_rating():
    assert format_rating(compute_reputation([5, 4, 4])) == '4.3'
    assert format_rating(compute_reputation([])) == '0.0'


def test_store_reputation_joins_reviews_through_products(container, business_store):
    products = container.product_service
    reviews = container.review_service
    p1 = products.create_product(business_store.id, 'Camisa', 10)['product']
    p2 = products.create_product(business_store.id, 'Falda', 12)['product']
    other = container.store_service.create_store(owner_name='Otro Dueño', name='Otra', city='León')
    p3 = products.create_product(other.id, 'Gorra', 5)['product']

    reviews.add_review(p1.id, 5)
    reviews.add_review(p2.id, 4)
    reviews.add_review(p2.id, 5)
    reviews.add_review(p3.id, 1)

    result = container.reputation_service.get_store_reputation(business_store.id)
    assert result.count == 3
    assert result.status is ReputationStatus.EXCELLENT

    by_store = container.reputation_service.reputations_for_stores([business_store, other])
    assert by_store[other.id].status is ReputationStatus.SCAM_ALERT


def test_deleted_product_reviews_stop_counting(container, business_store):
    product = container.product_service.create_product(business_store.id, 'Camisa', 10)['product']
    container.review_service.add_review(product.id, 1)
    container.product_service.delete_product(product.id, confirmed=True)

    result = container.reputation_service.get_store_reputation(business_store.id)
    assert result.count == 0
    assert result.status is ReputationStatus.NEUTRAL
    # la reseña huérfana se conserva
    assert len(container.review_service.get_reviews(product.id)) == 1
