import pytest

from lyracodec.comfort_noise import ComfortNoiseGenerator

SAMPLE_RATE = 16000
NUM_FEATURES = 3
WINDOW_LENGTH = 10
HOP_LENGTH = 5


@pytest.fixture
def generator():
    return ComfortNoiseGenerator(SAMPLE_RATE, NUM_FEATURES, WINDOW_LENGTH, HOP_LENGTH)


def test_num_samples_requested_out_of_bounds(generator):
    generator.add_features([0.0] * NUM_FEATURES)
    with pytest.raises(ValueError):
        generator.generate_samples(HOP_LENGTH + 1)
    with pytest.raises(ValueError):
        generator.generate_samples(-1)
    assert generator.generate_samples(0) == []


@pytest.mark.parametrize("num_features", [0, NUM_FEATURES - 1, NUM_FEATURES + 1])
def test_wrong_number_of_features_fails(generator, num_features):
    generator.add_features([1.0] * num_features)
    with pytest.raises(ValueError):
        generator.generate_samples(HOP_LENGTH)


def test_correct_number_of_features_succeeds(generator):
    generator.add_features([1.0] * NUM_FEATURES)
    samples = generator.generate_samples(HOP_LENGTH)
    assert len(samples) == HOP_LENGTH


def test_buffer_gets_cleared_correctly(generator):
    generator.add_features([0.0] * NUM_FEATURES)
    assert len(generator.generate_samples(HOP_LENGTH)) == HOP_LENGTH
    generator.reset()
    with pytest.raises(ValueError):
        generator.generate_samples(HOP_LENGTH)


def test_basic_use_case(generator):
    generator.add_features([0.0] * NUM_FEATURES)
    samples = generator.generate_samples(HOP_LENGTH)
    assert samples == [0] * HOP_LENGTH

    generator.add_features([1.0] * NUM_FEATURES)
    previous = samples
    samples = generator.generate_samples(HOP_LENGTH)
    assert len(samples) == HOP_LENGTH
    assert samples != previous

    for _ in range(10):
        previous = samples
        samples = generator.generate_samples(HOP_LENGTH)
        assert len(samples) == HOP_LENGTH
        assert samples != previous


def test_samples_stay_in_int16_range(generator):
    generator.add_features([2.0] * NUM_FEATURES)
    for _ in range(5):
        samples = generator.generate_samples(HOP_LENGTH)
        assert all(-32768 <= sample <= 32767 for sample in samples)


def test_partial_requests_use_buffer(generator):
    generator.add_features([1.0] * NUM_FEATURES)
    first = generator.generate_samples(2)
    second = generator.generate_samples(3)
    assert len(first) == 2
    assert len(second) == 3


def test_hop_longer_than_fft_fails():
    with pytest.raises(ValueError):
        ComfortNoiseGenerator(SAMPLE_RATE, NUM_FEATURES, WINDOW_LENGTH, 20)