"""
Tests for wide-flange fiber sections.

Reference shape: d = 14, tw = 0.5, bf = 8, tf = 0.6 (in), A = 16.0 in^2
without fillets. Units: kip-inch (US).
"""

import math

import pytest

from fibersec.errors import SectionError
from fibersec.section import AddedElastic, BendingType, SectionMode
from fibersec.torsion import steel_shear_modulus, wf_torsion_constant
from fibersec.wide_flange import (
    ElasticPPSteel,
    ElasticSmallStiffnessSteel,
    ElasticSteel,
    ExistingMaterial,
    HardeningSteel,
    Lehigh,
    ShenSteel,
    ShenSteelDegrade,
    Steel01Steel,
    Steel02Steel,
    WFDimensions,
    wf_section,
)

D, TW, BF, TF = 14.0, 0.5, 8.0, 0.6
AREA = 2 * BF * TF + (D - 2 * TF) * TW
EPP = ElasticPPSteel(29000.0, 50.0)


def _wf(section_id=1, start=1, nf1=20, mode="strong", material=EPP, **kwargs):
    return wf_section(section_id, start, nf1, mode, D, TW, BF, TF, material, **kwargs)


class TestDimensions:

    def test_area(self):
        assert abs(WFDimensions(D, TW, BF, TF).area - 16.0) < 1e-12

    def test_fillet_area_and_offset(self):
        dims = WFDimensions(D, TW, BF, TF, k=1.1)
        r = 0.5
        assert abs(dims.fillet_area - (1 - math.pi / 4) * r * r) < 1e-12
        assert 0.0 < dims.fillet_offset < r

    def test_invalid(self):
        with pytest.raises(SectionError, match="positive"):
            WFDimensions(D, 0.0, BF, TF).validate()
        with pytest.raises(SectionError, match="no web"):
            WFDimensions(1.0, TW, BF, 0.6).validate()
        with pytest.raises(SectionError, match="k"):
            WFDimensions(D, TW, BF, TF, k=0.5).validate()


class TestPlainSections:

    def test_strong_axis_area_and_counts(self):
        desc = _wf()
        fibers = desc.fibers()
        # 1 fiber per flange, 19 in the web
        assert len(fibers) == 21
        assert abs(desc.area() - AREA) < 1e-9
        assert all(f.z == 0.0 for f in fibers)
        assert max(f.y for f in fibers) < D / 2

    def test_strong_axis_inertia(self):
        fibers = _wf(nf1=200).fibers()
        I = sum(f.area * f.y ** 2 for f in fibers)
        exact = (BF * D ** 3 - (BF - TW) * (D - 2 * TF) ** 3) / 12.0
        assert abs(I - exact) / exact < 0.01

    def test_weak_axis_area(self):
        desc = _wf(mode="weak")
        assert abs(desc.area() - AREA) < 1e-9
        assert max(f.y for f in desc.fibers()) < BF / 2

    def test_three_d_area_and_symmetry(self):
        desc = _wf(nf1=20, mode=10)
        fibers = desc.fibers()
        assert abs(desc.area() - AREA) < 1e-9
        assert abs(sum(f.y * f.area for f in fibers)) < 1e-9
        assert abs(sum(f.z * f.area for f in fibers)) < 1e-9
        assert desc.bending.type is BendingType.THREE_D

    def test_fillets_add_area(self):
        desc = _wf(fillet_k=1.1)
        dims = WFDimensions(D, TW, BF, TF, k=1.1)
        assert abs(desc.area() - dims.area) < 1e-9

    def test_single_material_tag(self):
        desc = _wf(start=7)
        assert desc.mat_tags == [7]
        assert desc.material(7).kind == "ElasticPP"
        assert desc.next_mat_tag == 8


class TestMaterials:

    def test_existing_material_defines_nothing(self):
        desc = _wf(material=ExistingMaterial(3), GJ=1000.0)
        assert desc.materials == []
        assert all(f.mat_tag == 3 for f in desc.fibers())

    def test_existing_material_three_d_needs_gj(self):
        with pytest.raises(SectionError, match="no E defined"):
            _wf(mode=10, material=ExistingMaterial(3))

    def test_existing_material_two_d_gj_zero(self):
        assert _wf(material=ExistingMaterial(3)).GJ == 0.0

    def test_existing_material_added_elastic_takes_start_tag(self):
        desc = _wf(start=4, material=ExistingMaterial(3),
                   added_elastic=AddedElastic.two_d(100.0, 1000.0))
        assert desc.mat_tags == [4]

    def test_variants(self):
        kinds = [
            (ElasticSteel(29000.0), "Elastic"),
            (ElasticSmallStiffnessSteel(29000.0, 50.0), "multiSurfaceKinematicHardening"),
            (HardeningSteel(29000.0, 50.0, 0.01), "multiSurfaceKinematicHardening"),
            (Steel01Steel(29000.0, 50.0, 0.01), "Steel01"),
            (Steel02Steel(29000.0, 50.0, 0.01), "Steel02"),
            (ShenSteel(29000.0, 50.0, 65.0, 0.2, "US"), "shenSteel01"),
        ]
        for material, kind in kinds:
            desc = _wf(material=material)
            assert desc.materials[0].kind == kind

    def test_every_variant_constructs_with_keywords(self):
        variants = [
            ElasticSteel(Es=29000.0),
            ElasticPPSteel(Es=29000.0, Fy=50.0),
            ElasticSmallStiffnessSteel(Es=29000.0, Fy=50.0),
            HardeningSteel(Es=29000.0, Fy=50.0, b=0.01),
            Steel01Steel(Es=29000.0, Fy=50.0, b=0.01),
            Steel02Steel(Es=29000.0, Fy=50.0, b=0.01),
            ShenSteel(Es=29000.0, Fy=50.0, Fu=65.0, eu=0.2, units="US"),
            ShenSteelDegrade(Es=29000.0, Fy=50.0, Fu=65.0, eu=0.2, units="US"),
        ]
        G = steel_shear_modulus(29000.0)
        for material in variants:
            assert material.Es == 29000.0
            desc = _wf(mode=10, material=material)
            assert abs(desc.GJ - G * wf_torsion_constant(D, TW, BF, TF)) < 1e-6

    def test_existing_material_es_defaults_to_none(self):
        assert ExistingMaterial(3).Es is None
        assert ExistingMaterial(tag=3, Es=29000.0).Es == 29000.0
        desc = _wf(mode=10, material=ExistingMaterial(3, 29000.0))
        assert desc.materials == []
        assert desc.GJ > 0.0

    def test_small_stiffness_tangent(self):
        desc = _wf(material=ElasticSmallStiffnessSteel(29000.0, 50.0))
        assert desc.materials[0].option("-Direct", 4) == (29000.0, 0.0, 50.0, 29.0)

    def test_shen_degrade_buckling_strain(self):
        material = ShenSteelDegrade(29000.0, 50.0, 65.0, 0.2, "US")
        dims = WFDimensions(D, TW, BF, TF)
        elb = material.local_buckling_strain(dims)
        assert elb < -50.0 / 29000.0
        desc = _wf(material=material)
        assert desc.materials[0].option("-localBuckling", 4)[0] == elb


class TestLehigh:

    def test_tags_and_stresses(self):
        desc = _wf(start=10, material=ElasticPPSteel(29000.0, 50.0),
                   lehigh=Lehigh(-15.0, 5))
        assert desc.mat_tags == list(range(10, 16))
        # offset strain -fr/Es: tips compressed, web in tension
        tip = desc.material(10).args[3]
        web = desc.material(15).args[3]
        assert tip > 0.0 > web

    def test_area_conserved(self):
        for mode in ("strong", "weak", 8):
            desc = _wf(material=ShenSteel(29000.0, 50.0, 65.0, 0.2, "US"),
                       lehigh=Lehigh(-15.0, 4), mode=mode)
            assert abs(desc.area() - AREA) < 1e-9

    def test_steel01_wraps_base_material(self):
        desc = _wf(start=1, material=Steel01Steel(29000.0, 50.0, 0.01),
                   lehigh=Lehigh(-15.0, 3))
        assert desc.materials[0].kind == "Steel01"
        assert [m.kind for m in desc.materials[1:]] == ["InitStressMaterial"] * 4
        assert all(m.args[0] == 1 for m in desc.materials[1:])

    def test_ignored_for_elastic(self, caplog):
        desc = _wf(material=ElasticSteel(29000.0), lehigh=Lehigh(-15.0, 3))
        assert len(desc.materials) == 1
        assert "ignored" in caplog.text

    def test_positive_frc_rejected(self):
        with pytest.raises(SectionError, match="negative"):
            _wf(lehigh=Lehigh(5.0, 3))


class TestSectionOptions:

    def test_gj_calc(self):
        desc = _wf(mode=10)
        expected = steel_shear_modulus(29000.0) * wf_torsion_constant(D, TW, BF, TF)
        assert abs(desc.GJ - expected) < 1e-6

    def test_gj_literal_plus_added(self):
        added = AddedElastic.three_d(100.0, 1000.0, 500.0, 250.0)
        desc = _wf(mode=10, GJ=1000.0, added_elastic=added)
        assert desc.GJ == 1250.0
        assert desc.mat_tags == [1, 2]

    def test_gj_mode_not_for_steel(self):
        with pytest.raises(SectionError, match="does not apply"):
            _wf(GJ="concreteonly")

    def test_no_section(self):
        desc = _wf(section_id="noSection")
        assert desc.mode is SectionMode.NO_SECTION
        assert desc.GJ is None
        assert len(desc.fibers()) == 21

    def test_materials_only(self):
        desc = _wf(section_id="materialsOnly")
        assert desc.components == []
        assert desc.mat_tags == [1]

    def test_bad_mode(self):
        with pytest.raises(SectionError, match="wfSection"):
            _wf(mode="sideways")
