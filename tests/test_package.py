import contractual


def test_package_info():
    info = contractual.get_package_info()
    assert info["package_name"] == "contractual"
    assert info["package_version"] == contractual.__version__
    assert info["contracts"] == [
        "TestableContract",
        "EqualityContract",
        "ComparableContract",
        "NonInstantiableContract",
    ]
    assert info["default_settings"]["assumption_policy"] == "error"


def test_public_names_are_exported():
    for name in contractual.__all__:
        assert hasattr(contractual, name), name
